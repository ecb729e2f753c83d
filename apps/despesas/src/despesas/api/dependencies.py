"""API dependency providers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from despesas.db.session import get_db_session
from despesas.repositories.api_key_repository import ApiKeyRepository
from despesas.repositories.expense_repository import ExpenseRepository
from despesas.services.api_key_service import ApiKeyService
from despesas.services.expense_service import ExpenseService


def get_expense_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> ExpenseService:
    """Build expense service with per-request session."""

    return ExpenseService(
        expense_repository=ExpenseRepository(session),
        session=session,
    )


def get_api_key_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> ApiKeyService:
    """Build API key service with per-request session."""

    return ApiKeyService(
        api_key_repository=ApiKeyRepository(session),
        session=session,
    )


def get_current_user_mail(
    service: Annotated[ApiKeyService, Depends(get_api_key_service)],
    x_api_key: Annotated[str | None, Header(alias="x-api-key")] = None,
) -> str:
    """Resolve the x-api-key header to the owner e-mail."""

    return service.authenticate(x_api_key)
