# worker/app/errors.py
from __future__ import annotations

from typing import Optional


class ExecutionError(RuntimeError):
    """The captioning process could not be started or exited abnormally."""

    def __init__(
        self, message: str, returncode: Optional[int] = None, stderr: str = ""
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ValidationError(ValueError):
    """A required input is missing."""
