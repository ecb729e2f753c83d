"""Key-authenticated expense routes."""

from __future__ import annotations

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from despesas.api.dependencies import get_current_user_mail, get_expense_service
from despesas.api.schemas.expenses import (
    CreateExpenseRequest,
    ExpenseListResponse,
    ExpenseResponse,
    UpdateExpenseRequest,
)
from despesas.domain.expense_types import ExpenseType
from despesas.services.expense_service import (
    API_REQUEST_ORIGIN,
    CreateExpenseInput,
    ExpenseListFilters,
    ExpenseService,
    SortField,
    SortOrder,
    UpdateExpenseInput,
)

router = APIRouter(prefix="/expenses", tags=["Expenses"])

UserMail = Annotated[str, Depends(get_current_user_mail)]
Service = Annotated[ExpenseService, Depends(get_expense_service)]


@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Payload invalido"},
        401: {"description": "API key invalida ou revogada"},
    },
)
def create_expense(
    payload: CreateExpenseRequest,
    user_mail: UserMail,
    service: Service,
) -> ExpenseResponse:
    """Register an expense for the owner of the API key."""

    expense = service.create_expense(
        user_mail,
        CreateExpenseInput(
            description=payload.description,
            value=payload.value,
            type=payload.type,
            user_ip=API_REQUEST_ORIGIN,
        ),
    )
    return ExpenseResponse.from_model(expense)


@router.get(
    "",
    response_model=ExpenseListResponse,
    responses={401: {"description": "API key invalida ou revogada"}},
)
def list_expenses(
    user_mail: UserMail,
    service: Service,
    type: Annotated[ExpenseType | None, Query()] = None,
    day: Annotated[date | None, Query()] = None,
    sort: Annotated[SortField, Query()] = "created_at",
    order: Annotated[SortOrder, Query()] = "desc",
) -> ExpenseListResponse:
    """List expenses with optional type/day filters and ordering."""

    result = service.list_expenses(
        user_mail,
        ExpenseListFilters(type=type, day=day, sort_field=sort, sort_order=order),
    )
    return ExpenseListResponse.from_models(items=result.items, summary=result.summary)


@router.patch(
    "/{expense_id}",
    response_model=ExpenseResponse,
    responses={
        400: {"description": "Payload invalido"},
        401: {"description": "API key invalida ou revogada"},
        404: {"description": "Despesa nao encontrada"},
    },
)
def update_expense(
    expense_id: UUID,
    payload: UpdateExpenseRequest,
    user_mail: UserMail,
    service: Service,
) -> ExpenseResponse:
    expense = service.update_expense(
        user_mail,
        expense_id,
        UpdateExpenseInput(
            description=payload.description,
            value=payload.value,
            type=payload.type,
        ),
    )
    return ExpenseResponse.from_model(expense)


@router.delete(
    "/{expense_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        401: {"description": "API key invalida ou revogada"},
        404: {"description": "Despesa nao encontrada"},
    },
)
def delete_expense(
    expense_id: UUID,
    user_mail: UserMail,
    service: Service,
) -> Response:
    service.delete_expense(user_mail, expense_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
