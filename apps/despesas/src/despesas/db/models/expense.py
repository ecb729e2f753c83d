"""Expense ORM model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, Enum, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from despesas.db.base import Base
from despesas.domain.expense_types import ExpenseType


class Expense(Base):
    """One spending record owned by a user e-mail."""

    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("value > 0", name="ck_expenses_value_positive"),
        Index("ix_expenses_user_mail_created_at", "user_mail", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    user_mail: Mapped[str] = mapped_column(String(320), nullable=False)
    description: Mapped[str] = mapped_column(String(100), nullable=False)
    value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    type: Mapped[ExpenseType] = mapped_column(
        Enum(
            ExpenseType,
            name="expense_type",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
    )
    user_ip: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
