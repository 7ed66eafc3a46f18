"""실시간 브로드캐스트 서비스입니다. WebSocket 연결 허브와 핸들러에 주입되는 이벤트 싱크를 제공합니다."""

import logging
from typing import Any, Dict, Protocol

from fastapi import BackgroundTasks, WebSocket
from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)

NEW_NOTICE = "newNotice"
UPDATED_NOTICE = "updatedNotice"
DELETED_NOTICE = "deletedNotice"
ACKNOWLEDGED_NOTICE = "acknowledgedNotice"
SCHEDULE_UPDATE = "scheduleUpdate"


class EventSink(Protocol):
    def publish(self, event: str, payload: Any) -> None:
        ...


class ConnectionHub:
    """접속한 모든 클라이언트에게 이벤트를 전달한다. 재전송/ack는 없다."""

    def __init__(self):
        self._connections: Dict[int, WebSocket] = {}

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> int:
        await websocket.accept()
        key = id(websocket)
        self._connections[key] = websocket
        logger.info("[realtime] client connected (total=%s)", len(self._connections))
        return key

    def disconnect(self, key: int) -> None:
        if self._connections.pop(key, None) is not None:
            logger.info("[realtime] client disconnected (total=%s)", len(self._connections))

    async def broadcast(self, event: str, payload: Any) -> int:
        message = {"event": event, "payload": payload}
        delivered = 0
        dead = []
        for key, connection in list(self._connections.items()):
            try:
                await connection.send_json(message)
                delivered += 1
            except Exception as exc:
                logger.warning("[realtime] dropping connection after send failure: %s", exc)
                dead.append(key)
        for key in dead:
            self.disconnect(key)
        return delivered


hub = ConnectionHub()


class BroadcastEventSink:
    """응답 이후 백그라운드 작업으로 브로드캐스트를 예약한다."""

    def __init__(self, connection_hub: ConnectionHub, background_tasks: BackgroundTasks):
        self._hub = connection_hub
        self._tasks = background_tasks

    def publish(self, event: str, payload: Any) -> None:
        self._tasks.add_task(self._hub.broadcast, event, jsonable_encoder(payload, by_alias=True))


def get_event_sink(background_tasks: BackgroundTasks) -> EventSink:
    return BroadcastEventSink(hub, background_tasks)
