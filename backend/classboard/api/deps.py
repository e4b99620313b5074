from collections.abc import Generator
import logging
import secrets

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from classboard.core.config import Settings, get_settings
from classboard.core.exceptions import InvalidPinError
from classboard.db.session import SessionLocal
from classboard.services.rate_limit import client_key, pin_limiter
from classboard.services.store import SqlSnapshotStore

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> SqlSnapshotStore:
    return SqlSnapshotStore(db)


def check_admin_pin(request: Request, pin: str | None, settings: Settings) -> None:
    key = client_key(request)
    blocked, retry_after = pin_limiter.is_blocked(
        key=key,
        limit=settings.pin_rate_limit_max_attempts,
        window_seconds=settings.pin_rate_limit_window_seconds,
    )
    if blocked:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Too many PIN attempts. Try again in {retry_after} second(s).",
            headers={"Retry-After": str(retry_after)},
        )
    if not pin or not secrets.compare_digest(pin.encode(), settings.admin_pin.encode()):
        pin_limiter.record_failure(key)
        logger.warning("Rejected admin PIN from %s", key)
        raise InvalidPinError()
    pin_limiter.reset(key)


def require_admin(request: Request, settings: Settings = Depends(get_settings)) -> None:
    check_admin_pin(request, request.headers.get(settings.admin_pin_header), settings)
