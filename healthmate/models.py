from __future__ import annotations
from typing import Literal
from pydantic import BaseModel


# --- Chat sessions ---
class ActiveSessionsResponse(BaseModel):
    active: int


class ChatSessionStats(BaseModel):
    sessionId: str
    state: Literal["idle", "streaming", "terminated"]
    streaming: bool
    connectedAt: float
    repliesStarted: int
    repliesCompleted: int
    repliesPreempted: int
    errorsSent: int
