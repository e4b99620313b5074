from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect

from classboard.api.deps import get_store
from classboard.core.config import Settings, get_settings
from classboard.schemas.board import BoardOut, TriggerTimeOut
from classboard.services.broadcast_hub import BOARD_CHANNEL, broadcast_hub
from classboard.services.catalog import break_end_times, trigger_times
from classboard.services.locator import build_board, school_now
from classboard.services.store import SqlSnapshotStore

router = APIRouter()


@router.get("", response_model=BoardOut)
def live_board(
    at: datetime | None = Query(default=None),
    settings: Settings = Depends(get_settings),
    store: SqlSnapshotStore = Depends(get_store),
) -> BoardOut:
    zone = ZoneInfo(settings.school_timezone)
    if at is None:
        moment = school_now(settings.school_timezone)
    elif at.tzinfo is None:
        moment = at.replace(tzinfo=zone)
    else:
        moment = at.astimezone(zone)
    return build_board(store.load_schedule(), moment)


@router.get("/triggers", response_model=list[TriggerTimeOut])
def list_trigger_times() -> list[TriggerTimeOut]:
    break_ends = break_end_times()
    return [TriggerTimeOut(time=time, endsBreak=time in break_ends) for time in sorted(trigger_times())]


@router.websocket("/ws")
async def board_websocket(websocket: WebSocket) -> None:
    await broadcast_hub.connect(BOARD_CHANNEL, websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await broadcast_hub.disconnect(BOARD_CHANNEL, websocket)
