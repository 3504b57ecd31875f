import threading
from typing import Dict, FrozenSet, List, NamedTuple, Optional, Set, Tuple
from logging_config import get_logger

logger = get_logger(__name__)


class UserRecord(NamedTuple):
    user_id: str
    room_id: str


class LeaveResult(NamedTuple):
    room_id: str
    remaining: FrozenSet[str]


class RegistryStats(NamedTuple):
    user_count: int
    room_count: int


class RoomRegistry:
    """In-memory presence registry for a single process.

    Maps live connection ids to user records and room ids to the set of
    connection ids currently in that room. Every public method runs under one
    lock, so a join or leave is never observed half applied.
    """

    def __init__(self):
        self._users: Dict[str, UserRecord] = {}
        self._rooms: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()
        logger.info("Initializing in-memory RoomRegistry")

    def join(self, connection_id: str, user_id: str, room_id: str) -> FrozenSet[str]:
        """Add a connection to a room and return the members that were already there."""
        with self._lock:
            previous = self._users.get(connection_id)
            if previous and previous.room_id != room_id:
                # A connection is in at most one room
                self._detach(connection_id, previous.room_id)
                logger.debug(f"Connection {connection_id} moved out of room {previous.room_id}")

            self._users[connection_id] = UserRecord(user_id=user_id, room_id=room_id)
            members = self._rooms.setdefault(room_id, set())
            existing = frozenset(members - {connection_id})
            members.add(connection_id)

        logger.debug(f"Connection {connection_id} ({user_id}) added to room {room_id}, {len(existing)} existing members")
        return existing

    def lookup_user(self, connection_id: str) -> Optional[UserRecord]:
        with self._lock:
            return self._users.get(connection_id)

    def room_members(self, room_id: str) -> FrozenSet[str]:
        """Get all connection ids in a room. Unknown rooms are empty."""
        with self._lock:
            return frozenset(self._rooms.get(room_id, ()))

    def room_users(self, room_id: str) -> List[Tuple[str, UserRecord]]:
        """Snapshot of (connection_id, user record) pairs for a room."""
        with self._lock:
            return [(conn_id, self._users[conn_id]) for conn_id in self._rooms.get(room_id, ())]

    def room_ids(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._rooms)

    def leave(self, connection_id: str) -> Optional[LeaveResult]:
        """Remove a connection's user record and room membership.

        Returns the room it was in and the members left behind, or None when
        the connection never joined a room.
        """
        with self._lock:
            record = self._users.pop(connection_id, None)
            if record is None:
                return None
            remaining = self._detach(connection_id, record.room_id)

        logger.debug(f"Connection {connection_id} removed from room {record.room_id}, {len(remaining)} remaining")
        return LeaveResult(room_id=record.room_id, remaining=remaining)

    def stats(self) -> RegistryStats:
        with self._lock:
            return RegistryStats(user_count=len(self._users), room_count=len(self._rooms))

    def _detach(self, connection_id: str, room_id: str) -> FrozenSet[str]:
        # Caller holds the lock
        members = self._rooms.get(room_id)
        if members is None:
            return frozenset()
        members.discard(connection_id)
        if not members:
            del self._rooms[room_id]
            logger.info(f"Room {room_id} is empty, removed")
            return frozenset()
        return frozenset(members)


room_registry = RoomRegistry()
