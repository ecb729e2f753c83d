"""Business service for expense records."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Protocol
from uuid import UUID

from despesas.core.settings import get_settings
from despesas.db.models.expense import Expense
from despesas.domain.clock import local_day, now_local
from despesas.domain.errors import (
    ExpenseNotFoundError,
    InvalidAmountError,
    InvalidRequestError,
    compose_error_message,
)
from despesas.domain.expense_types import ExpenseType
from despesas.domain.money import ZERO, quantize_money

logger = logging.getLogger(__name__)

SortField = Literal["created_at", "value", "type"]
SortOrder = Literal["asc", "desc"]

WEB_APP_ORIGIN = "web-app"
API_REQUEST_ORIGIN = "api-request"


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by this service."""

    def commit(self) -> None: ...
    def rollback(self) -> None: ...
    def refresh(self, instance: object) -> None: ...


class ExpenseRepositoryProtocol(Protocol):
    """Expense repository contract consumed by service."""

    def add(self, expense: Expense) -> Expense: ...

    def get_for_user(self, expense_id: UUID, user_mail: str) -> Expense | None: ...

    def list_for_user(self, user_mail: str) -> list[Expense]: ...

    def delete(self, expense: Expense) -> None: ...


@dataclass(slots=True, frozen=True)
class CreateExpenseInput:
    """Validated fields for a new expense."""

    description: str
    value: Decimal
    type: ExpenseType
    user_ip: str = WEB_APP_ORIGIN


@dataclass(slots=True, frozen=True)
class UpdateExpenseInput:
    """Partial update; ``None`` keeps the stored field."""

    description: str | None = None
    value: Decimal | None = None
    type: ExpenseType | None = None


@dataclass(slots=True, frozen=True)
class ExpenseListFilters:
    """In-memory filters and ordering for the expense history."""

    type: ExpenseType | None = None
    day: date | None = None
    sort_field: SortField = "created_at"
    sort_order: SortOrder = "desc"


@dataclass(slots=True, frozen=True)
class DailyTotal:
    day: date
    total: Decimal


@dataclass(slots=True, frozen=True)
class ExpenseSummary:
    """Aggregates over every expense of the user."""

    count: int
    total: Decimal
    average: Decimal
    daily_totals: list[DailyTotal] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class ExpenseListResult:
    items: list[Expense]
    summary: ExpenseSummary


class ExpenseService:
    """Handles expense registration, edition, removal and history listing."""

    def __init__(
        self,
        *,
        expense_repository: ExpenseRepositoryProtocol,
        session: SessionProtocol,
        clock: Callable[[], datetime] = now_local,
    ) -> None:
        self._expense_repository = expense_repository
        self._session = session
        self._clock = clock

    def create_expense(self, user_mail: str, payload: CreateExpenseInput) -> Expense:
        description = self._validate_description(payload.description)
        value = self._validate_value(payload.value)
        now = self._clock()

        try:
            expense = self._expense_repository.add(
                Expense(
                    user_mail=user_mail,
                    description=description,
                    value=value,
                    type=payload.type,
                    user_ip=payload.user_ip,
                    created_at=now,
                    updated_at=now,
                )
            )
            self._session.commit()
            self._session.refresh(expense)
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "expense_created",
            extra={
                "expense_id": str(expense.id),
                "user_mail": user_mail,
                "type": payload.type.value,
                "origin": payload.user_ip,
            },
        )
        return expense

    def update_expense(
        self,
        user_mail: str,
        expense_id: UUID,
        changes: UpdateExpenseInput,
    ) -> Expense:
        expense = self._get_owned(user_mail, expense_id)

        try:
            if changes.description is not None:
                expense.description = self._validate_description(changes.description)
            if changes.value is not None:
                expense.value = self._validate_value(changes.value)
            if changes.type is not None:
                expense.type = changes.type
            expense.updated_at = self._clock()
            self._session.commit()
            self._session.refresh(expense)
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "expense_updated",
            extra={"expense_id": str(expense.id), "user_mail": user_mail},
        )
        return expense

    def delete_expense(self, user_mail: str, expense_id: UUID) -> None:
        expense = self._get_owned(user_mail, expense_id)
        try:
            self._expense_repository.delete(expense)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "expense_deleted",
            extra={"expense_id": str(expense_id), "user_mail": user_mail},
        )

    def list_expenses(
        self,
        user_mail: str,
        filters: ExpenseListFilters | None = None,
    ) -> ExpenseListResult:
        filters = filters or ExpenseListFilters()
        expenses = self._expense_repository.list_for_user(user_mail)

        items = expenses
        if filters.type is not None:
            items = [expense for expense in items if expense.type == filters.type]
        if filters.day is not None:
            items = [
                expense
                for expense in items
                if local_day(expense.created_at) == filters.day
            ]

        items = sorted(
            items,
            key=_sort_key(filters.sort_field),
            reverse=filters.sort_order == "desc",
        )
        return ExpenseListResult(items=items, summary=summarize_expenses(expenses))

    def _get_owned(self, user_mail: str, expense_id: UUID) -> Expense:
        expense = self._expense_repository.get_for_user(expense_id, user_mail)
        if expense is None:
            raise ExpenseNotFoundError(details={"expense_id": str(expense_id)})
        return expense

    @staticmethod
    def _validate_description(description: str) -> str:
        trimmed = description.strip()
        max_length = get_settings().expense_description_max_length
        if not trimmed:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="Descrição é obrigatória.",
                    action="Describe the expense and try again.",
                )
            )
        if len(trimmed) > max_length:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause=(
                        f"Descrição deve ter no máximo {max_length} caracteres."
                    ),
                    action="Shorten the description and try again.",
                )
            )
        return trimmed

    @staticmethod
    def _validate_value(value: Decimal) -> Decimal:
        amount = quantize_money(value)
        if amount <= ZERO:
            raise InvalidAmountError(details={"value": str(value)})
        if amount > get_settings().expense_value_max:
            raise InvalidAmountError(
                message=compose_error_message(
                    cause="Valor muito alto.",
                    action="Split the expense or review the typed amount.",
                ),
                details={"value": str(value)},
            )
        return amount


def _sort_key(sort_field: SortField) -> Callable[[Expense], object]:
    if sort_field == "value":
        return lambda expense: expense.value
    if sort_field == "type":
        return lambda expense: expense.type.value
    return lambda expense: expense.created_at


def summarize_expenses(expenses: list[Expense]) -> ExpenseSummary:
    """Compute count, total, average and per-day totals."""

    total = sum((expense.value for expense in expenses), ZERO)
    average = quantize_money(total / len(expenses)) if expenses else ZERO

    per_day: defaultdict[date, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        per_day[local_day(expense.created_at)] += expense.value

    return ExpenseSummary(
        count=len(expenses),
        total=quantize_money(total),
        average=quantize_money(average),
        daily_totals=[
            DailyTotal(day=day, total=quantize_money(per_day[day]))
            for day in sorted(per_day)
        ],
    )
