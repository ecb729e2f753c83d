"""Expense categories and their pt-BR labels."""

from __future__ import annotations

import enum


class ExpenseType(enum.StrEnum):
    """Supported expense categories."""

    FOOD = "food"
    STUDY = "study"
    TRANSPORT = "transport"
    FUN = "fun"
    OTHER = "other"


EXPENSE_TYPE_LABELS: dict[ExpenseType, str] = {
    ExpenseType.FOOD: "Alimentação",
    ExpenseType.STUDY: "Estudo",
    ExpenseType.TRANSPORT: "Transporte",
    ExpenseType.FUN: "Diversão",
    ExpenseType.OTHER: "Outros",
}


def expense_type_label(expense_type: ExpenseType) -> str:
    return EXPENSE_TYPE_LABELS[expense_type]
