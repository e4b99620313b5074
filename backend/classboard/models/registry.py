from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from classboard.db.base import Base


class RegistrySnapshot(Base):
    __tablename__ = "registry_snapshot"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    payload: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
