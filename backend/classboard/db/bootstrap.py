from __future__ import annotations

import logging

from sqlalchemy import inspect

from classboard.db.base import Base
from classboard.db.session import engine
import classboard.models  # noqa: F401

logger = logging.getLogger(__name__)

REQUIRED_TABLES: set[str] = {"schedule_snapshot", "registry_snapshot", "activity_logs"}


def _assert_required_tables() -> None:
    with engine.connect() as connection:
        table_names = set(inspect(connection).get_table_names())
    missing = sorted(REQUIRED_TABLES - table_names)
    if missing:
        raise RuntimeError(f"Missing tables: {', '.join(missing)}")


def ensure_runtime_schema() -> None:
    try:
        Base.metadata.create_all(bind=engine)
        _assert_required_tables()
    except Exception as exc:
        logger.exception("Runtime schema bootstrap failed")
        raise RuntimeError("Runtime schema bootstrap failed") from exc
