from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Callable

from anyio import from_thread
from fastapi import WebSocket

logger = logging.getLogger(__name__)

BOARD_CHANNEL = "board"

SnapshotListener = Callable[[list], None]


class BroadcastHub:
    """Fans full-collection snapshots out to websockets and in-process listeners."""

    def __init__(self) -> None:
        self._connections: dict[str, set[WebSocket]] = defaultdict(set)
        self._listeners: dict[str, list[SnapshotListener]] = defaultdict(list)
        self._lock = asyncio.Lock()

    async def connect(self, channel: str, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._connections[channel].add(websocket)

    async def disconnect(self, channel: str, websocket: WebSocket) -> None:
        async with self._lock:
            sockets = self._connections.get(channel)
            if not sockets:
                return
            sockets.discard(websocket)
            if not sockets:
                self._connections.pop(channel, None)

    async def publish(self, channel: str, payload: dict) -> None:
        async with self._lock:
            sockets = list(self._connections.get(channel, set()))

        if not sockets:
            return

        stale: list[WebSocket] = []
        for websocket in sockets:
            try:
                await websocket.send_json(payload)
            except Exception:  # pragma: no cover - network/runtime dependent
                stale.append(websocket)

        if stale:
            async with self._lock:
                active = self._connections.get(channel, set())
                for socket in stale:
                    active.discard(socket)
                if not active:
                    self._connections.pop(channel, None)
            logger.debug("Removed %d stale board websocket(s) on %s", len(stale), channel)

    def subscribe(self, topic: str, listener: SnapshotListener) -> Callable[[], None]:
        self._listeners[topic].append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(topic, [])
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def broadcast(self, topic: str, snapshot: list) -> None:
        """Deliver ``snapshot`` to local listeners, then push it to board sockets.

        Called from sync code running in a worker thread; outside one the
        websocket push is skipped.
        """
        for listener in list(self._listeners.get(topic, [])):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Snapshot listener failed for %s", topic)

        payload = {"event": f"{topic}.updated", topic: snapshot}
        try:
            from_thread.run(self.publish, BOARD_CHANNEL, payload)
        except Exception:  # pragma: no cover - runtime environment dependent
            logger.debug("Unable to push %s snapshot to board sockets", topic, exc_info=True)


broadcast_hub = BroadcastHub()
