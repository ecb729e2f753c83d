"""ORM models for the despesas domain."""

from despesas.db.models.api_key import ApiKey
from despesas.db.models.expense import Expense

__all__ = ["ApiKey", "Expense"]
