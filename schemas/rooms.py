from pydantic import BaseModel
from typing import Dict, Optional


class RoomUser(BaseModel):
    connectionId: str
    userId: Optional[str] = None

class RoomUsersResponse(BaseModel):
    users: list[RoomUser]
    count: int

class HealthResponse(BaseModel):
    status: str
    connectedUsers: int
    activeRooms: int
    timestamp: str

class ServiceInfoResponse(BaseModel):
    service: str
    status: str
    version: str
    endpoints: Dict[str, str]
