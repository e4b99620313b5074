from fastapi import APIRouter, Depends, Request

from classboard.api.deps import check_admin_pin
from classboard.core.config import Settings, get_settings
from classboard.schemas.auth import PinVerifyRequest, PinVerifyResponse

router = APIRouter()


@router.post("/pin", response_model=PinVerifyResponse)
def verify_pin(
    payload: PinVerifyRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
) -> PinVerifyResponse:
    check_admin_pin(request, payload.pin, settings)
    return PinVerifyResponse(ok=True)
