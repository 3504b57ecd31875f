import asyncio
import uuid
from typing import Any, Dict, Iterable
from fastapi import WebSocket
from logging_config import get_logger

logger = get_logger(__name__)


class ConnectionManager:
    """Tracks live WebSocket connections by connection id and delivers events to them.

    Delivery is best-effort: events for unknown connection ids are dropped and
    send failures are logged, never raised to the caller.
    """

    def __init__(self):
        self._connections: Dict[str, WebSocket] = {}
        self._send_locks: Dict[str, asyncio.Lock] = {}

    def connect(self, websocket: WebSocket) -> str:
        """Register an accepted socket under a fresh connection id."""
        connection_id = uuid.uuid4().hex
        while connection_id in self._connections:
            connection_id = uuid.uuid4().hex
        self._connections[connection_id] = websocket
        self._send_locks[connection_id] = asyncio.Lock()
        logger.debug(f"Registered connection {connection_id} (live connections: {len(self._connections)})")
        return connection_id

    def disconnect(self, connection_id: str):
        self._connections.pop(connection_id, None)
        self._send_locks.pop(connection_id, None)
        logger.debug(f"Unregistered connection {connection_id} (live connections: {len(self._connections)})")

    def is_connected(self, connection_id: str) -> bool:
        return connection_id in self._connections

    def __len__(self):
        return len(self._connections)

    async def send(self, connection_id: str, event: str, data: Any) -> bool:
        """Send one event to one connection. Returns False if it was dropped."""
        websocket = self._connections.get(connection_id)
        lock = self._send_locks.get(connection_id)
        if websocket is None or lock is None:
            logger.debug(f"Dropping {event} for unknown connection {connection_id}")
            return False

        try:
            # One writer per socket at a time
            async with lock:
                await websocket.send_json({"event": event, "data": data})
            return True
        except Exception as e:
            logger.warning(f"Error sending {event} to connection {connection_id}: {e}")
            return False

    async def send_many(self, connection_ids: Iterable[str], event: str, data: Any) -> int:
        """Send the same event to an explicit list of connections."""
        targets = list(connection_ids)
        if not targets:
            return 0
        results = await asyncio.gather(*(self.send(conn_id, event, data) for conn_id in targets))
        delivered = sum(1 for ok in results if ok)
        logger.debug(f"Delivered {event} to {delivered}/{len(targets)} connections")
        return delivered


connection_manager = ConnectionManager()
