from typing import Any, FrozenSet, Optional, Set
import socketio
from app.core.logger import logger


class BroadcastHub:
    """Registry of connected clients plus fan-out of server events."""

    def __init__(self, sio: socketio.AsyncServer):
        self.sio = sio
        self._clients: Set[str] = set()

    @property
    def clients(self) -> FrozenSet[str]:
        return frozenset(self._clients)

    def register(self, sid: str):
        self._clients.add(sid)
        logger.info(f"User connected: {sid} ({len(self._clients)} online)")

    def unregister(self, sid: str):
        self._clients.discard(sid)
        logger.info(f"User disconnected: {sid} ({len(self._clients)} online)")

    async def send(self, sid: str, event: str, data: Any = None):
        # Undeliverable events are dropped, the client resyncs on its next reload
        try:
            await self.sio.emit(event, data, to=sid)
        except Exception as e:
            logger.warning(f"⚠️ Could not deliver '{event}' to {sid}: {e}")

    async def broadcast(self, event: str, data: Any = None, exclude: Optional[str] = None):
        recipients = [sid for sid in self.clients if sid != exclude]
        for sid in recipients:
            await self.send(sid, event, data)
        logger.info(f"Broadcast '{event}' to {len(recipients)} clients")
