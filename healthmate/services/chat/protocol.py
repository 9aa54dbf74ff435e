"""
Wire protocol of the chat WebSocket.

Inbound frames are JSON objects ``{"type": "chat", "content": "..."}``.
Outbound frames are ``chunk`` / ``done`` / ``error`` events.
"""

from __future__ import annotations

import json
from typing import Literal, Union

from pydantic import BaseModel, StrictStr, ValidationError

PROCESSING_FAILED = "消息处理失败"


class MessageError(ValueError):
    """An inbound frame that cannot be handled."""


class MalformedMessage(MessageError):
    pass


class UnsupportedKind(MessageError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"Unsupported message type: {kind!r}")
        self.kind = kind


class ChatMessage(BaseModel):
    type: Literal["chat"]
    content: StrictStr


class ChunkEvent(BaseModel):
    type: Literal["chunk"] = "chunk"
    content: str


class DoneEvent(BaseModel):
    type: Literal["done"] = "done"


class ErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    content: str = PROCESSING_FAILED


OutboundEvent = Union[ChunkEvent, DoneEvent, ErrorEvent]

SUPPORTED_KINDS = frozenset({"chat"})


def parse_inbound(raw: Union[str, bytes]) -> ChatMessage:
    """Decode one inbound frame, raising a :class:`MessageError` subclass on failure."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedMessage("Frame is not valid UTF-8") from exc

    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise MalformedMessage(f"Frame is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedMessage("Frame must be a JSON object")

    kind = data.get("type")
    if not isinstance(kind, str):
        raise MalformedMessage("Frame is missing a string 'type' field")
    if kind not in SUPPORTED_KINDS:
        raise UnsupportedKind(kind)

    try:
        return ChatMessage.model_validate(data)
    except ValidationError as exc:
        raise MalformedMessage(f"Invalid {kind!r} frame: {exc.error_count()} error(s)") from exc


def encode_event(event: OutboundEvent) -> str:
    return event.model_dump_json()


__all__ = [
    "PROCESSING_FAILED",
    "ChatMessage",
    "ChunkEvent",
    "DoneEvent",
    "ErrorEvent",
    "MalformedMessage",
    "MessageError",
    "OutboundEvent",
    "UnsupportedKind",
    "encode_event",
    "parse_inbound",
]
