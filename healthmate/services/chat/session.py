import asyncio
import contextlib
import logging
import time
import uuid
from enum import Enum
from typing import Callable, Dict, Optional, Union

from fastapi import WebSocket, WebSocketDisconnect

from .protocol import (
    ChunkEvent,
    DoneEvent,
    ErrorEvent,
    MessageError,
    OutboundEvent,
    encode_event,
    parse_inbound,
)
from .replies import resolve as default_resolve
from .typewriter import DEFAULT_CHUNK_SIZE, DEFAULT_INTERVAL, start_typewriter

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    TERMINATED = "terminated"


class SessionClosed(RuntimeError):
    """Raised when sending on a session whose transport is gone."""


class ChatSession:
    """Server-side state of one chat WebSocket.

    The session owns the socket and at most one typewriter task. A new chat
    message cancels the running typewriter before the next reply starts, and
    closing the session cancels it for good.
    """

    def __init__(
        self,
        session_id: str,
        websocket: WebSocket,
        *,
        resolve: Callable[[str], str] = default_resolve,
        interval: float = DEFAULT_INTERVAL,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.session_id = session_id
        self.websocket = websocket
        self.state = SessionState.IDLE
        self.connected_at = time.time()
        self.replies_started = 0
        self.replies_completed = 0
        self.replies_preempted = 0
        self.errors_sent = 0
        self._resolve = resolve
        self._interval = interval
        self._chunk_size = chunk_size
        self._typewriter: Optional[asyncio.Task] = None
        self._send_lock = asyncio.Lock()

    @property
    def streaming(self) -> bool:
        return self._typewriter is not None and not self._typewriter.done()

    async def send_event(self, event: OutboundEvent) -> None:
        if self.state is SessionState.TERMINATED:
            raise SessionClosed(f"Session {self.session_id} is closed")
        async with self._send_lock:
            try:
                await self.websocket.send_text(encode_event(event))
            except (WebSocketDisconnect, RuntimeError, OSError) as exc:
                logger.info("Session %s: send failed (%s), terminating", self.session_id, exc)
                self.state = SessionState.TERMINATED
                raise SessionClosed(f"Session {self.session_id} transport failed") from exc

    async def handle_frame(self, raw: Union[str, bytes]) -> None:
        try:
            message = parse_inbound(raw)
        except MessageError as exc:
            logger.warning("Session %s: rejected frame (%s)", self.session_id, exc)
            self.errors_sent += 1
            await self.send_event(ErrorEvent())
            return

        await self.start_reply(message.content)

    async def start_reply(self, user_text: str) -> None:
        if self.state is SessionState.TERMINATED:
            raise SessionClosed(f"Session {self.session_id} is closed")

        if await self.cancel_typewriter():
            self.replies_preempted += 1
            logger.info("Session %s: preempted in-flight reply", self.session_id)

        reply = self._resolve(user_text)
        self.replies_started += 1
        self.state = SessionState.STREAMING
        task = start_typewriter(
            reply,
            self._emit_chunk,
            self._finish_reply,
            interval=self._interval,
            size=self._chunk_size,
            on_error=self._fail_reply,
            name=f"typewriter-{self.session_id}-{self.replies_started}",
        )
        task.add_done_callback(self._on_typewriter_exit)
        self._typewriter = task

    async def cancel_typewriter(self) -> bool:
        """Stop the running typewriter, if any. Returns True when one was cancelled."""
        task, self._typewriter = self._typewriter, None
        if task is None or task.done():
            return False
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError, SessionClosed):
            await task
        return True

    async def run(self) -> None:
        """Receive frames until the client goes away or the transport fails."""
        try:
            while self.state is not SessionState.TERMINATED:
                message = await self.websocket.receive()
                if message["type"] == "websocket.disconnect":
                    logger.info("Session %s: client disconnected (code=%s)", self.session_id, message.get("code"))
                    break
                raw = message.get("text")
                if raw is None:
                    raw = message.get("bytes") or b""
                await self.handle_frame(raw)
        except WebSocketDisconnect as exc:
            logger.info("Session %s: client disconnected (code=%s)", self.session_id, exc.code)
        except SessionClosed as exc:
            logger.info("Session %s: %s", self.session_id, exc)
        except (RuntimeError, OSError) as exc:
            logger.warning("Session %s: transport error: %s", self.session_id, exc)
        finally:
            await self.close()

    async def close(self) -> None:
        self.state = SessionState.TERMINATED
        await self.cancel_typewriter()

    def stats(self) -> dict:
        return {
            "sessionId": self.session_id,
            "state": self.state.value,
            "streaming": self.streaming,
            "connectedAt": self.connected_at,
            "repliesStarted": self.replies_started,
            "repliesCompleted": self.replies_completed,
            "repliesPreempted": self.replies_preempted,
            "errorsSent": self.errors_sent,
        }

    async def _emit_chunk(self, chunk: str) -> None:
        await self.send_event(ChunkEvent(content=chunk))

    async def _finish_reply(self) -> None:
        await self.send_event(DoneEvent())
        self.replies_completed += 1
        if self.state is SessionState.STREAMING:
            self.state = SessionState.IDLE

    async def _fail_reply(self, exc: Exception) -> None:
        if isinstance(exc, SessionClosed):
            raise exc
        logger.error("Session %s: reply delivery failed", self.session_id, exc_info=exc)
        if self.state is SessionState.STREAMING:
            self.state = SessionState.IDLE
        self.errors_sent += 1
        await self.send_event(ErrorEvent())

    def _on_typewriter_exit(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        if isinstance(exc, SessionClosed):
            logger.info("Session %s: typewriter stopped, transport closed", self.session_id)
            return
        logger.error("Session %s: typewriter failed", self.session_id, exc_info=exc)
        if self.state is SessionState.STREAMING:
            self.state = SessionState.IDLE


class ChatSessionManager:
    def __init__(
        self,
        *,
        resolve: Callable[[str], str] = default_resolve,
        interval: float = DEFAULT_INTERVAL,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.resolve = resolve
        self.interval = interval
        self.chunk_size = chunk_size
        self._sessions: Dict[str, ChatSession] = {}

    def open_session(self, websocket: WebSocket) -> ChatSession:
        session_id = uuid.uuid4().hex
        session = ChatSession(
            session_id,
            websocket,
            resolve=self.resolve,
            interval=self.interval,
            chunk_size=self.chunk_size,
        )
        self._sessions[session_id] = session
        logger.info("Session %s: client connected", session_id)
        return session

    async def handle_connection(self, websocket: WebSocket) -> None:
        """Run one accepted connection to completion."""
        session = self.open_session(websocket)
        try:
            await session.run()
        finally:
            await self.close_session(session.session_id)

    async def close_session(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if not session:
            return
        await session.close()
        logger.info("Session %s: closed", session_id)

    async def close_all(self) -> None:
        for session_id in list(self._sessions):
            await self.close_session(session_id)

    def get_session(self, session_id: str) -> Optional[ChatSession]:
        return self._sessions.get(session_id)

    def get_stats(self, session_id: str) -> Optional[dict]:
        session = self._sessions.get(session_id)
        if not session:
            return None
        return session.stats()

    def active_count(self) -> int:
        return len(self._sessions)


# Singleton manager for router modules to import.
manager = ChatSessionManager()
