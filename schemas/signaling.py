from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict


class Envelope(BaseModel):
    """A single WebSocket frame: {"event": ..., "data": {...}}."""
    event: str
    data: Dict[str, Any] = {}

class JoinRoomPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    roomId: str = Field(min_length=1)
    userId: str = Field(min_length=1)

class RelayTarget(BaseModel):
    # Only the routing target is checked; everything else passes through untouched
    model_config = ConfigDict(extra="allow")

    targetConnectionId: str = Field(min_length=1)
