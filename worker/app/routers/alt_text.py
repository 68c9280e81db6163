# worker/app/routers/alt_text.py
from __future__ import annotations

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from worker.app.config import settings
from worker.app.errors import ExecutionError, ValidationError
from worker.app.models import AltTextRequest, AltTextResponse
from worker.app.services.alt_text import generate_alt_texts
from worker.app.services.ollama_cli import Captioner, OllamaCliCaptioner

log = logging.getLogger(__name__)

router = APIRouter()

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1


def get_captioner() -> Captioner:
    """Dependency hook; tests override it with a fake."""
    return OllamaCliCaptioner()


def parse_count(raw: Optional[str], default: int) -> int:
    """
    Best-effort count: use the leading integer of raw, else keep default.
    Values outside the signed 64-bit range also keep default.
    """
    if not raw:
        return default
    m = _LEADING_INT.match(raw)
    if not m:
        return default
    value = int(m.group(1))
    if not _INT64_MIN <= value <= _INT64_MAX:
        return default
    return value


def build_request(
    image_path: Optional[str], count: Optional[str], model: Optional[str]
) -> AltTextRequest:
    if not image_path:
        raise ValidationError("image_path is required")
    return AltTextRequest(
        image_path=image_path,
        model=model or settings.DEFAULT_MODEL,
        count=parse_count(count, settings.DEFAULT_COUNT),
    )


@router.get("/generate-alt-text", response_model=AltTextResponse)
def generate_alt_text(
    image_path: Optional[str] = None,
    count: Optional[str] = None,
    model: Optional[str] = None,
    captioner: Captioner = Depends(get_captioner),
):
    """
    Sample the model `count` times for image_path and return {"alt_texts": [...]}.

    400 text/plain when image_path is missing, 500 text/plain when a sample fails.
    No captions serialize as an empty list, not null.
    """
    # sync route: FastAPI runs it in the threadpool while the subprocess blocks
    try:
        req = build_request(image_path, count, model)
    except ValidationError as e:
        return PlainTextResponse(str(e), status_code=400)

    try:
        alt_texts = generate_alt_texts(
            req.image_path, model=req.model, count=req.count, captioner=captioner
        )
    except ExecutionError as e:
        log.error(f"[generate-alt-text] {req.image_path}: {e}")
        return PlainTextResponse(f"Error executing command: {e}", status_code=500)

    return AltTextResponse(alt_texts=alt_texts)
