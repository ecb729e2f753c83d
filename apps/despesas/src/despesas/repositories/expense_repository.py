"""Expense persistence operations keyed by user e-mail."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from despesas.db.models.expense import Expense


class ExpenseRepository:
    """Create/read/update/delete access to one user's expenses."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, expense: Expense) -> Expense:
        self._session.add(expense)
        self._session.flush()
        return expense

    def get_for_user(self, expense_id: UUID, user_mail: str) -> Expense | None:
        statement = select(Expense).where(
            Expense.id == expense_id,
            Expense.user_mail == user_mail,
        )
        return self._session.scalar(statement)

    def list_for_user(self, user_mail: str) -> list[Expense]:
        statement = (
            select(Expense)
            .where(Expense.user_mail == user_mail)
            .order_by(Expense.created_at.desc())
        )
        return list(self._session.scalars(statement).all())

    def delete(self, expense: Expense) -> None:
        self._session.delete(expense)
        self._session.flush()
