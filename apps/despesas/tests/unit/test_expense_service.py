from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

import pytest

from despesas.db.models.expense import Expense
from despesas.domain.errors import (
    ExpenseNotFoundError,
    InvalidAmountError,
    InvalidRequestError,
)
from despesas.domain.expense_types import ExpenseType
from despesas.services.expense_service import (
    CreateExpenseInput,
    ExpenseListFilters,
    ExpenseService,
    UpdateExpenseInput,
    summarize_expenses,
)

SAO_PAULO = ZoneInfo("America/Sao_Paulo")
ANA = "ana@example.com"


class FakeSession:
    def __init__(self) -> None:
        self.commits = 0
        self.rolled_back = False

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rolled_back = True

    def refresh(self, instance: object) -> None:
        _ = instance


@dataclass
class FakeExpenseRepository:
    expenses: list[Expense] = field(default_factory=list)

    def add(self, expense: Expense) -> Expense:
        if expense.id is None:
            expense.id = uuid4()
        self.expenses.append(expense)
        return expense

    def get_for_user(self, expense_id: UUID, user_mail: str) -> Expense | None:
        for expense in self.expenses:
            if expense.id == expense_id and expense.user_mail == user_mail:
                return expense
        return None

    def list_for_user(self, user_mail: str) -> list[Expense]:
        owned = [expense for expense in self.expenses if expense.user_mail == user_mail]
        return sorted(owned, key=lambda expense: expense.created_at, reverse=True)

    def delete(self, expense: Expense) -> None:
        self.expenses.remove(expense)


class FixedClock:
    def __init__(self, *moments: datetime) -> None:
        self._moments = list(moments)

    def __call__(self) -> datetime:
        return self._moments.pop(0)


def _at(day: int, hour: int = 12) -> datetime:
    return datetime(2026, 3, day, hour, tzinfo=SAO_PAULO)


def _service(
    repository: FakeExpenseRepository,
    session: FakeSession | None = None,
    *moments: datetime,
) -> ExpenseService:
    return ExpenseService(
        expense_repository=repository,
        session=session or FakeSession(),
        clock=FixedClock(*(moments or (_at(1),) * 10)),
    )


def test_create_expense_trims_description_and_quantizes_value() -> None:
    repository = FakeExpenseRepository()
    session = FakeSession()
    service = _service(repository, session)

    expense = service.create_expense(
        ANA,
        CreateExpenseInput(
            description="  Padaria  ",
            value=Decimal("10.005"),
            type=ExpenseType.FOOD,
        ),
    )

    assert expense.description == "Padaria"
    assert expense.value == Decimal("10.01")
    assert expense.user_ip == "web-app"
    assert expense.created_at == expense.updated_at == _at(1)
    assert session.commits == 1


@pytest.mark.parametrize("value", [Decimal("0"), Decimal("0.004"), Decimal("-3")])
def test_create_expense_rejects_non_positive_value(value: Decimal) -> None:
    service = _service(FakeExpenseRepository())

    with pytest.raises(InvalidAmountError):
        service.create_expense(
            ANA,
            CreateExpenseInput(description="Cafe", value=value, type=ExpenseType.FOOD),
        )


def test_create_expense_rejects_value_above_limit() -> None:
    service = _service(FakeExpenseRepository())

    with pytest.raises(InvalidAmountError):
        service.create_expense(
            ANA,
            CreateExpenseInput(
                description="Carro",
                value=Decimal("1000000.00"),
                type=ExpenseType.TRANSPORT,
            ),
        )


@pytest.mark.parametrize("description", ["   ", "x" * 101])
def test_create_expense_rejects_invalid_description(description: str) -> None:
    service = _service(FakeExpenseRepository())

    with pytest.raises(InvalidRequestError):
        service.create_expense(
            ANA,
            CreateExpenseInput(
                description=description,
                value=Decimal("1.00"),
                type=ExpenseType.OTHER,
            ),
        )


def test_update_expense_changes_fields_and_bumps_updated_at() -> None:
    repository = FakeExpenseRepository()
    service = _service(repository, None, _at(1), _at(2))
    expense = service.create_expense(
        ANA,
        CreateExpenseInput(
            description="Livro", value=Decimal("50"), type=ExpenseType.FUN
        ),
    )

    updated = service.update_expense(
        ANA,
        expense.id,
        UpdateExpenseInput(value=Decimal("45.5"), type=ExpenseType.STUDY),
    )

    assert updated.value == Decimal("45.50")
    assert updated.type == ExpenseType.STUDY
    assert updated.description == "Livro"
    assert updated.created_at == _at(1)
    assert updated.updated_at == _at(2)


def test_update_expense_of_other_user_is_not_found() -> None:
    repository = FakeExpenseRepository()
    service = _service(repository)
    expense = service.create_expense(
        ANA,
        CreateExpenseInput(
            description="Uber", value=Decimal("20"), type=ExpenseType.TRANSPORT
        ),
    )

    with pytest.raises(ExpenseNotFoundError):
        service.update_expense(
            "bia@example.com", expense.id, UpdateExpenseInput(description="Taxi")
        )


def test_delete_expense_removes_row() -> None:
    repository = FakeExpenseRepository()
    service = _service(repository)
    expense = service.create_expense(
        ANA,
        CreateExpenseInput(
            description="Cinema", value=Decimal("30"), type=ExpenseType.FUN
        ),
    )

    service.delete_expense(ANA, expense.id)

    assert repository.expenses == []
    with pytest.raises(ExpenseNotFoundError):
        service.delete_expense(ANA, expense.id)


def _seed_history(repository: FakeExpenseRepository) -> ExpenseService:
    service = _service(repository, None, _at(1, 9), _at(1, 18), _at(3), _at(5))
    for description, value, expense_type in [
        ("Mercado", "120.00", ExpenseType.FOOD),
        ("Onibus", "4.40", ExpenseType.TRANSPORT),
        ("Curso", "300.00", ExpenseType.STUDY),
        ("Lanche", "15.60", ExpenseType.FOOD),
    ]:
        service.create_expense(
            ANA,
            CreateExpenseInput(
                description=description, value=Decimal(value), type=expense_type
            ),
        )
    return service


def test_list_expenses_defaults_to_newest_first() -> None:
    service = _seed_history(FakeExpenseRepository())

    result = service.list_expenses(ANA)

    assert [item.description for item in result.items] == [
        "Lanche",
        "Curso",
        "Onibus",
        "Mercado",
    ]


def test_list_expenses_sorts_by_value_ascending() -> None:
    service = _seed_history(FakeExpenseRepository())

    result = service.list_expenses(
        ANA, ExpenseListFilters(sort_field="value", sort_order="asc")
    )

    assert [item.value for item in result.items] == [
        Decimal("4.40"),
        Decimal("15.60"),
        Decimal("120.00"),
        Decimal("300.00"),
    ]


def test_list_expenses_filters_by_type_and_day() -> None:
    service = _seed_history(FakeExpenseRepository())

    by_type = service.list_expenses(ANA, ExpenseListFilters(type=ExpenseType.FOOD))
    by_day = service.list_expenses(ANA, ExpenseListFilters(day=date(2026, 3, 1)))

    assert {item.description for item in by_type.items} == {"Mercado", "Lanche"}
    assert {item.description for item in by_day.items} == {"Mercado", "Onibus"}
    assert by_day.summary.count == 4


def test_summary_totals_average_and_daily_totals() -> None:
    service = _seed_history(FakeExpenseRepository())

    summary = service.list_expenses(ANA).summary

    assert summary.count == 4
    assert summary.total == Decimal("440.00")
    assert summary.average == Decimal("110.00")
    assert [(item.day, item.total) for item in summary.daily_totals] == [
        (date(2026, 3, 1), Decimal("124.40")),
        (date(2026, 3, 3), Decimal("300.00")),
        (date(2026, 3, 5), Decimal("15.60")),
    ]


def test_summary_of_empty_history_is_zero() -> None:
    summary = summarize_expenses([])

    assert summary.count == 0
    assert summary.total == Decimal("0.00")
    assert summary.average == Decimal("0.00")
    assert summary.daily_totals == []
