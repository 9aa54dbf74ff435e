import logging
import socket
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import CORS_ALLOW_ORIGINS, HOST, LOG_LEVEL, PORT, STATIC_IMAGES_DIR, UVICORN_RELOAD
from .routes.routes_catalog import router as catalog_router
from .routes.routes_chat import router as chat_router
from .routes.routes_home import router as home_router
from .routes.routes_reports import router as reports_router
from .services.chat import manager as chat_manager

logger = logging.getLogger(__name__)


class ListenerBindError(RuntimeError):
    """The listening socket could not be bound."""


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    # Stop any typewriter still running when the server shuts down.
    await chat_manager.close_all()


app = FastAPI(title="HealthMate", version=__version__, lifespan=lifespan)


# Allow local dev frontends; tighten in production
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(home_router)
app.include_router(catalog_router)
app.include_router(reports_router)
app.include_router(chat_router)

if STATIC_IMAGES_DIR.is_dir():
    app.mount("/images", StaticFiles(directory=str(STATIC_IMAGES_DIR)), name="images")
else:
    logger.info("Static image directory %s not found; /images is not mounted", STATIC_IMAGES_DIR)


@app.get("/")
def root():
    return {"ok": True, "service": "HealthMate"}


def bind_socket(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError as exc:
        sock.close()
        raise ListenerBindError(f"Could not bind {host}:{port}: {exc}") from exc
    sock.set_inheritable(True)
    return sock


def serve(host: str = HOST, port: int = PORT) -> None:
    """Bind the listening socket up front, then hand it to uvicorn."""
    sock = bind_socket(host, port)
    config = uvicorn.Config(app, host=host, port=port, log_level=LOG_LEVEL.lower(), ws="websockets")
    server = uvicorn.Server(config)
    logger.info("HealthMate listening on %s:%s", host, port)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()


def main() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        if UVICORN_RELOAD:
            # Dev-only path; surface a busy port as ListenerBindError before the reloader starts.
            bind_socket(HOST, PORT).close()
            uvicorn.run("healthmate.main:app", host=HOST, port=PORT, reload=True)
        else:
            serve(HOST, PORT)
    except ListenerBindError as exc:
        logger.error("Listener failed to start: %s", exc)
        raise SystemExit(1) from exc
    except Exception as exc:
        logger.exception("Listener stopped unexpectedly")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
