"""Schemas for expense endpoints."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from despesas.db.models.expense import Expense
from despesas.domain.expense_types import ExpenseType, expense_type_label
from despesas.domain.money import format_currency, format_money, try_parse_amount
from despesas.services.expense_service import DailyTotal, ExpenseSummary

VALUE_MIN = Decimal("0.01")


def _coerce_value(value: Any) -> Any:
    """Accept JSON numbers or display strings such as ``R$ 25,50``."""

    if isinstance(value, bool):
        raise ValueError("Valor deve ser um número positivo.")
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        parsed = try_parse_amount(value)
        if parsed is None:
            raise ValueError("Digite um valor válido maior que zero.")
        return parsed
    return value


def _clean_description(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        raise ValueError("Descrição é obrigatória.")
    return trimmed


class CreateExpenseRequest(BaseModel):
    """Payload for creating an expense."""

    description: str = Field(min_length=1)
    value: Decimal = Field(ge=VALUE_MIN)
    type: ExpenseType

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str) -> str:
        return _clean_description(value)

    @field_validator("value", mode="before")
    @classmethod
    def validate_value(cls, value: Any) -> Any:
        return _coerce_value(value)


class UpdateExpenseRequest(BaseModel):
    """Partial update payload; omitted fields are kept."""

    description: str | None = Field(default=None, min_length=1)
    value: Decimal | None = Field(default=None, ge=VALUE_MIN)
    type: ExpenseType | None = None

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return _clean_description(value)

    @field_validator("value", mode="before")
    @classmethod
    def validate_value(cls, value: Any) -> Any:
        if value is None:
            return None
        return _coerce_value(value)


class ExpenseResponse(BaseModel):
    """Serialized expense returned by API."""

    id: UUID
    user_mail: str
    description: str
    value: str = Field(pattern=r"^[0-9]+\.[0-9]{2}$")
    value_display: str
    type: ExpenseType
    type_label: str
    user_ip: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, expense: Expense) -> ExpenseResponse:
        return cls(
            id=expense.id,
            user_mail=expense.user_mail,
            description=expense.description,
            value=format_money(expense.value),
            value_display=format_currency(expense.value),
            type=expense.type,
            type_label=expense_type_label(expense.type),
            user_ip=expense.user_ip,
            created_at=expense.created_at,
            updated_at=expense.updated_at,
        )


class DailyTotalResponse(BaseModel):
    day: date
    total: str
    total_display: str

    @classmethod
    def from_domain(cls, daily_total: DailyTotal) -> DailyTotalResponse:
        return cls(
            day=daily_total.day,
            total=format_money(daily_total.total),
            total_display=format_currency(daily_total.total),
        )


class ExpenseSummaryResponse(BaseModel):
    """Totals over every expense of the user."""

    count: int
    total: str
    total_display: str
    average: str
    average_display: str
    daily_totals: list[DailyTotalResponse]

    @classmethod
    def from_domain(cls, summary: ExpenseSummary) -> ExpenseSummaryResponse:
        return cls(
            count=summary.count,
            total=format_money(summary.total),
            total_display=format_currency(summary.total),
            average=format_money(summary.average),
            average_display=format_currency(summary.average),
            daily_totals=[
                DailyTotalResponse.from_domain(item) for item in summary.daily_totals
            ],
        )


class ExpenseListResponse(BaseModel):
    items: list[ExpenseResponse]
    total_items: int
    summary: ExpenseSummaryResponse

    @classmethod
    def from_models(
        cls, *, items: list[Expense], summary: ExpenseSummary
    ) -> ExpenseListResponse:
        return cls(
            items=[ExpenseResponse.from_model(item) for item in items],
            total_items=len(items),
            summary=ExpenseSummaryResponse.from_domain(summary),
        )
