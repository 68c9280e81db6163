# worker/tests/conftest.py
from __future__ import annotations

# Import/bootstrap so "import worker.app" works when running pytest from repo root
import os
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

import pytest

TESTS_DIR = Path(__file__).resolve().parent  # .../worker/tests
WORKER_DIR = TESTS_DIR.parent  # .../worker
REPO_ROOT = WORKER_DIR.parent  # repo root

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# Deterministic defaults; keep telemetry writes out of the repo tree.
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="alt-text-logs-"))
os.environ.setdefault("OLLAMA_BIN", "ollama")
os.environ.setdefault("DEFAULT_MODEL", "llava")
os.environ.setdefault("DEFAULT_COUNT", "3")

from worker.app.errors import ExecutionError  # noqa: E402


class FakeCaptioner:
    """Replays canned outputs; an Exception in the list is raised instead."""

    def __init__(self, outputs: List[object]):
        self.outputs = list(outputs)
        self.calls: List[tuple] = []

    def run(self, image_path: str, model: Optional[str] = None) -> str:
        self.calls.append((image_path, model))
        out = self.outputs[min(len(self.calls), len(self.outputs)) - 1]
        if isinstance(out, Exception):
            raise out
        return out


@pytest.fixture
def fake_captioner():
    return FakeCaptioner


@pytest.fixture
def failing_output():
    return ExecutionError("exit status 1", returncode=1)


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from worker.app.main import app

    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
