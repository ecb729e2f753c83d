"""API request and response schemas."""

from despesas.api.schemas.amounts import (
    NormalizeAmountRequest,
    NormalizeAmountResponse,
)
from despesas.api.schemas.expenses import (
    CreateExpenseRequest,
    ExpenseListResponse,
    ExpenseResponse,
    UpdateExpenseRequest,
)

__all__ = [
    "CreateExpenseRequest",
    "ExpenseListResponse",
    "ExpenseResponse",
    "NormalizeAmountRequest",
    "NormalizeAmountResponse",
    "UpdateExpenseRequest",
]
