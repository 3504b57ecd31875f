from fastapi import APIRouter, Request
from schemas.rooms import HealthResponse, RoomUser, RoomUsersResponse, ServiceInfoResponse
from registry import room_registry
from datetime import datetime, timezone
from constants import SERVICE_NAME, SERVICE_VERSION
from logging_config import get_logger

logger = get_logger(__name__)

rooms_router = APIRouter(tags=["rooms"])


@rooms_router.get("/", response_model=ServiceInfoResponse)
async def service_info():
    return ServiceInfoResponse(
        service=SERVICE_NAME,
        status="running",
        version=SERVICE_VERSION,
        endpoints={
            "health": "/health",
            "rooms": "/rooms/{room_id}",
            "websocket": "/ws",
        },
    )


@rooms_router.get("/health", response_model=HealthResponse)
async def health():
    stats = room_registry.stats()
    return HealthResponse(
        status="healthy",
        connectedUsers=stats.user_count,
        activeRooms=stats.room_count,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@rooms_router.get("/rooms/{room_id}", response_model=RoomUsersResponse)
async def get_room_users(room_id: str, request: Request):
    """
    List the users currently in a room.

    An unknown room is not an error: it simply has no users.
    """
    client_host = request.client.host if request.client else "unknown"
    logger.debug(f"Room lookup for {room_id} from {client_host}")

    users = [
        RoomUser(connectionId=conn_id, userId=record.user_id)
        for conn_id, record in room_registry.room_users(room_id)
    ]
    return RoomUsersResponse(users=users, count=len(users))
