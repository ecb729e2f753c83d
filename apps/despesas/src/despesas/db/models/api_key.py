"""API key ORM model."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from despesas.db.base import Base


class ApiKey(Base):
    """Key that authenticates the expense endpoints on behalf of a user."""

    __tablename__ = "api_keys"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    user_mail: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    api_key: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    revoked: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
