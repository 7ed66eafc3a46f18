"""실시간 이벤트 WebSocket 라우터입니다. 연결을 허브에 등록하고 끊기면 해제합니다."""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.services.realtime_service import hub

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def realtime_events(websocket: WebSocket):
    key = await hub.connect(websocket)
    try:
        # 서버 -> 클라이언트 단방향이지만 수신 루프로 연결 종료를 감지한다.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        hub.disconnect(key)
