"""
Configuration for the HealthMate backend.
Values come from the environment (optionally seeded from a local .env file)
and are exposed as module-level constants so routes and services can import
settings directly.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _optional(name: str, default: str = "") -> str:
    return os.getenv(name, default)


def _int_setting(name: str, default: str, minimum: int) -> int:
    raw = _optional(name, default)
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise RuntimeError(f"{name} must be at least {minimum}, got {value}")
    return value


PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = Path(__file__).resolve().parent / "data"

HOST = _optional("HOST", "0.0.0.0")
PORT = int(_optional("PORT", "3000"))
UVICORN_RELOAD = _optional("UVICORN_RELOAD", "0") == "1"
LOG_LEVEL = _optional("LOG_LEVEL", "INFO").upper()

# Typewriter pacing for streamed chat replies.
CHAT_CHUNK_SIZE = _int_setting("CHAT_CHUNK_SIZE", "2", minimum=1)
CHAT_CHUNK_INTERVAL_MS = _int_setting("CHAT_CHUNK_INTERVAL_MS", "50", minimum=0)

STATIC_IMAGES_DIR = Path(_optional("STATIC_IMAGES_DIR", str(PROJECT_ROOT / "static" / "images")))

_cors = _optional("CORS_ALLOW_ORIGINS", "*")
CORS_ALLOW_ORIGINS = [origin.strip() for origin in _cors.split(",") if origin.strip()] or ["*"]
