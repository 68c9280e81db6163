# worker/app/services/ollama_cli.py
"""
Runs a local vision model through the `ollama` command line.

Usage:
    from worker.app.services.ollama_cli import OllamaCliCaptioner

    raw = OllamaCliCaptioner().run("/photos/cat.png", model="llava")

The model sees the image because `ollama run` picks up file paths mentioned in
the prompt ("Added image '...'" is printed when it does).
"""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Protocol

from worker.app.config import settings
from worker.app.errors import ExecutionError

log = logging.getLogger(__name__)


class Captioner(Protocol):
    def run(self, image_path: str, model: Optional[str] = None) -> str: ...


def build_prompt(image_path: str, instruction: Optional[str] = None) -> str:
    return f"{instruction or settings.ALT_TEXT_PROMPT} {image_path}"


class OllamaCliCaptioner:
    def __init__(
        self, binary: Optional[str] = None, instruction: Optional[str] = None
    ) -> None:
        self.binary = binary or settings.OLLAMA_BIN
        self.instruction = instruction or settings.ALT_TEXT_PROMPT

    def command(self, image_path: str, model: Optional[str] = None) -> List[str]:
        model = model or settings.DEFAULT_MODEL
        return [self.binary, "run", model, build_prompt(image_path, self.instruction)]

    def run(self, image_path: str, model: Optional[str] = None) -> str:
        """
        Run the model once against image_path and return its full stdout.

        The image path is not checked here; a missing file is reported by the
        child process. There is no timeout: a hung model blocks the caller.

        Raises:
            ExecutionError: the binary could not be started or exited non-zero
        """
        cmd = self.command(image_path, model)
        log.debug(f"[ollama_cli] exec {cmd[:3]} image={image_path}")
        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
        except FileNotFoundError as e:
            raise ExecutionError(f'exec: "{self.binary}": executable file not found') from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            msg = f"exit status {e.returncode}"
            if stderr:
                msg = f"{msg}: {stderr}"
            raise ExecutionError(msg, returncode=e.returncode, stderr=stderr) from e
        except OSError as e:
            raise ExecutionError(f"exec: {e}") from e
        return proc.stdout
