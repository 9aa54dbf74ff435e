"""Chat package exports.

Reply lookup, typewriter pacing, the WebSocket message protocol and the
per-connection session manager used by the chat route.
"""
from .protocol import (
    ChatMessage,
    ChunkEvent,
    DoneEvent,
    ErrorEvent,
    MalformedMessage,
    MessageError,
    UnsupportedKind,
    parse_inbound,
)
from .replies import ReplyResolver, resolve
from .session import ChatSession, ChatSessionManager, SessionClosed, SessionState, manager
from .typewriter import split_chunks, start_typewriter, typewrite

__all__ = [
    "ChatMessage",
    "ChatSession",
    "ChatSessionManager",
    "ChunkEvent",
    "DoneEvent",
    "ErrorEvent",
    "MalformedMessage",
    "MessageError",
    "ReplyResolver",
    "SessionClosed",
    "SessionState",
    "UnsupportedKind",
    "manager",
    "parse_inbound",
    "resolve",
    "split_chunks",
    "start_typewriter",
    "typewrite",
]
