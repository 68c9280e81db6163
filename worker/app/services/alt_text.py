# worker/app/services/alt_text.py
from __future__ import annotations

import logging
import time
from typing import List, Optional

from worker.app.config import settings
from worker.app.errors import ExecutionError
from worker.app.services.extract import parse_output
from worker.app.services.ollama_cli import Captioner, OllamaCliCaptioner
from worker.app.telemetry import telemetry

log = logging.getLogger(__name__)


def generate_alt_texts(
    image_path: str,
    model: Optional[str] = None,
    count: Optional[int] = None,
    captioner: Optional[Captioner] = None,
    log_events: bool = True,
) -> List[str]:
    """
    Sample the model `count` times and return the non-empty captions in call order.

    Samples run one after another. The first ExecutionError aborts the whole batch
    and is re-raised; captions collected before it are dropped.
    An empty list is a normal result.
    log_events=False keeps counters but skips the JSONL event log (one-shot CLI runs).
    """
    model = model or settings.DEFAULT_MODEL
    count = settings.DEFAULT_COUNT if count is None else count
    captioner = captioner or OllamaCliCaptioner()

    started = time.time()
    telemetry.increment("generate_total")
    alt_texts: List[str] = []
    for i in range(count):
        try:
            output = captioner.run(image_path, model)
        except ExecutionError as e:
            telemetry.increment("generate_failed")
            telemetry.set_error(str(e))
            if log_events:
                telemetry.log_json(
                    "generate_failed",
                    level="error",
                    image_path=image_path,
                    model=model,
                    sample=i + 1,
                    count=count,
                    error=str(e),
                )
            log.warning(f"[alt_text] sample {i + 1}/{count} failed: {e}")
            raise
        telemetry.increment("samples_total")

        alt_text = parse_output(output)
        log.debug(f"[alt_text] sample {i + 1}/{count}: {alt_text!r}")
        if alt_text:
            alt_texts.append(alt_text)

    elapsed_ms = int((time.time() - started) * 1000)
    if log_events:
        telemetry.log_json(
            "generate",
            image_path=image_path,
            model=model,
            count=count,
            produced=len(alt_texts),
            elapsed_ms=elapsed_ms,
        )
    log.info(
        f"[alt_text] {len(alt_texts)}/{max(count, 0)} captions for {image_path} ({model}, {elapsed_ms}ms)"
    )
    return alt_texts
