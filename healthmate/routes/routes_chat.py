from fastapi import APIRouter, HTTPException, WebSocket

from ..models import ActiveSessionsResponse, ChatSessionStats
from ..services.chat import manager


router = APIRouter(tags=["chat"])


# Mobile clients connect on the bare host, so "/" stays mounted.
@router.websocket("/")
@router.websocket("/ws/chat")
async def chat_socket(websocket: WebSocket) -> None:
    await websocket.accept()
    await manager.handle_connection(websocket)


@router.get("/api/chat/sessions", response_model=ActiveSessionsResponse)
async def list_sessions() -> ActiveSessionsResponse:
    return ActiveSessionsResponse(active=manager.active_count())


@router.get("/api/chat/sessions/{session_id}", response_model=ChatSessionStats)
async def get_session_stats(session_id: str) -> ChatSessionStats:
    stats = manager.get_stats(session_id)
    if not stats:
        raise HTTPException(status_code=404, detail="Unknown sessionId")
    return ChatSessionStats(**stats)
