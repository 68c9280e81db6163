from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import shutil
from worker.app.routers import alt_text as alt_text_router
from worker.app.routers import status as status_router
from worker.app.config import settings as C

app = FastAPI(title="ollama-alt-text")

app.add_middleware(
    CORSMiddleware,
    allow_origins=C.cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(alt_text_router.router)
app.include_router(status_router.router)


@app.on_event("startup")
async def _startup_log():
    logging.info(
        f"[worker] OLLAMA_BIN={C.OLLAMA_BIN}  DEFAULT_MODEL={C.DEFAULT_MODEL}  DEFAULT_COUNT={C.DEFAULT_COUNT}"
    )
    if shutil.which(C.OLLAMA_BIN) is None:
        logging.warning(
            f"[worker] {C.OLLAMA_BIN!r} not found on PATH; /generate-alt-text will return 500"
        )
    logging.info("[worker] Routes: /generate-alt-text /status")


@app.get("/")
async def root():
    return {"message": "ollama-alt-text service"}


def serve(port: str) -> None:
    """Bind 0.0.0.0:<port> and serve until stopped; a bind failure raises OSError."""
    import socket

    import uvicorn

    sock = socket.create_server(("0.0.0.0", int(port)))
    try:
        uvicorn.Server(uvicorn.Config(app)).run(sockets=[sock])
    finally:
        sock.close()


if __name__ == "__main__":
    serve(C.PORT)
