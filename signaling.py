from typing import Any, Dict
from pydantic import ValidationError
from registry import RoomRegistry
from schemas.signaling import JoinRoomPayload, RelayTarget
from logging_config import get_logger

logger = get_logger(__name__)

# Inbound event -> (outbound event, field that carries the sender's connection id)
RELAY_EVENTS = {
    "offer": ("offer", "senderConnectionId"),
    "answer": ("answer", "senderConnectionId"),
    "ice-candidate": ("ice-candidate", "senderConnectionId"),
    "initiate-call": ("incoming-call", "callerConnectionId"),
    "call-response": ("call-response", "responderConnectionId"),
}


class SignalingRouter:
    """Dispatches inbound signaling events and relays them to their recipients.

    The router keeps no state of its own. Room membership lives in the
    registry; delivery is delegated to a transport exposing
    ``send(connection_id, event, data)`` and
    ``send_many(connection_ids, event, data)``.
    """

    def __init__(self, registry: RoomRegistry, transport):
        self.registry = registry
        self.transport = transport

    async def dispatch(self, connection_id: str, event: str, data: Any):
        """Handle one inbound event. Never raises on bad input."""
        try:
            if event == "join-room":
                await self.join_room(connection_id, data)
            elif event in RELAY_EVENTS:
                await self.relay(connection_id, event, data)
            else:
                logger.warning(f"Ignoring unknown event '{event}' from connection {connection_id}")
        except Exception as e:
            logger.error(f"Error handling {event} from connection {connection_id}: {e}", exc_info=True)

    async def join_room(self, connection_id: str, data: Any):
        try:
            payload = JoinRoomPayload.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Skipping malformed join-room from connection {connection_id}: {e.error_count()} errors")
            return

        # Leave and join are separate steps; safe because each connection's events are handled one at a time
        current = self.registry.lookup_user(connection_id)
        if current and current.room_id != payload.roomId:
            logger.info(f"Connection {connection_id} switching from room {current.room_id} to {payload.roomId}")
            await self.leave_room(connection_id)

        existing = self.registry.join(connection_id, payload.userId, payload.roomId)
        logger.info(f"User {payload.userId} joined room {payload.roomId}")

        await self.transport.send_many(existing, "user-joined", {
            "userId": payload.userId,
            "connectionId": connection_id,
        })

        room_users = [
            {"connectionId": conn_id, "userId": record.user_id}
            for conn_id, record in self.registry.room_users(payload.roomId)
            if conn_id in existing
        ]
        await self.transport.send(connection_id, "room-users", room_users)

    async def relay(self, connection_id: str, event: str, data: Any):
        """Forward a payload to its target, swapping the target id for the sender id."""
        try:
            target = RelayTarget.model_validate(data).targetConnectionId
        except ValidationError:
            logger.warning(f"Skipping {event} from connection {connection_id}: missing targetConnectionId")
            return

        outbound_event, sender_field = RELAY_EVENTS[event]
        forwarded: Dict[str, Any] = {k: v for k, v in data.items() if k != "targetConnectionId"}
        forwarded[sender_field] = connection_id

        logger.debug(f"Forwarding {event} from {connection_id} to {target}")
        await self.transport.send(target, outbound_event, forwarded)

    async def handle_disconnect(self, connection_id: str):
        try:
            await self.leave_room(connection_id)
        except Exception as e:
            logger.error(f"Error cleaning up connection {connection_id}: {e}", exc_info=True)

    async def leave_room(self, connection_id: str):
        result = self.registry.leave(connection_id)
        if result is None:
            return
        logger.info(f"Connection {connection_id} left room {result.room_id}")
        await self.transport.send_many(result.remaining, "user-left", {"connectionId": connection_id})
