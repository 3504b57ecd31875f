import pytest

from registry import RoomRegistry
from signaling import SignalingRouter


class FakeTransport:
    """Records outbound events; events for ids not in ``connected`` are dropped."""

    def __init__(self):
        self.connected = set()
        self.sent = []

    async def send(self, connection_id, event, data):
        if connection_id not in self.connected:
            return False
        self.sent.append((connection_id, event, data))
        return True

    async def send_many(self, connection_ids, event, data):
        delivered = 0
        for conn_id in connection_ids:
            if await self.send(conn_id, event, data):
                delivered += 1
        return delivered

    def events_for(self, connection_id):
        return [(event, data) for conn_id, event, data in self.sent if conn_id == connection_id]


@pytest.fixture
def registry():
    return RoomRegistry()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def router(registry, transport):
    return SignalingRouter(registry, transport)
