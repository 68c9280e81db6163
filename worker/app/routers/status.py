# worker/app/routers/status.py
from __future__ import annotations

import shutil

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from worker.app.config import settings
from worker.app.telemetry import telemetry

router = APIRouter()


@router.get("/status")
async def status():
    """
    Service health for the alt-text worker.
      - ollama: configured binary and whether it resolves on PATH
      - defaults: model/count used when a request omits them
      - telemetry counters
    """
    resolved = shutil.which(settings.OLLAMA_BIN)
    data = {
        "ok": True,
        "ollama": {
            "bin": settings.OLLAMA_BIN,
            "path": resolved,
            "available": resolved is not None,
        },
        "defaults": {
            "model": settings.DEFAULT_MODEL,
            "count": settings.DEFAULT_COUNT,
        },
        **telemetry.get_stats(),
    }
    return JSONResponse(data)
