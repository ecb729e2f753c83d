"""Domain exceptions used across API and services."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any


def compose_error_message(*, cause: str, action: str) -> str:
    """Build a user-facing error message with cause and corrective action."""

    return f"Cause: {cause} Action: {action}"


@dataclass(slots=True)
class DomainError(Exception):
    """Base exception for predictable domain failures."""

    code: str
    message: str
    status_code: int
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class InvalidRequestError(DomainError):
    """Raised when user sends semantically invalid input."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="VALIDATION_ERROR",
            message=message
            or compose_error_message(
                cause="Request data violates business rules.",
                action="Adjust the input fields and try again.",
            ),
            status_code=HTTPStatus.BAD_REQUEST,
            details=details or {},
        )


class InvalidAmountError(DomainError):
    """Raised when a submitted amount is zero, negative or unparseable."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="INVALID_AMOUNT",
            message=message
            or compose_error_message(
                cause="Digite um valor válido maior que zero.",
                action="Type the amount again, for example R$ 25,50.",
            ),
            status_code=HTTPStatus.BAD_REQUEST,
            details=details or {},
        )


class InvalidApiKeyError(DomainError):
    """Raised when the x-api-key header is missing, malformed or revoked."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="INVALID_API_KEY",
            message=message
            or compose_error_message(
                cause="API key inválida ou revogada.",
                action="Send the active 32-character key in the x-api-key header.",
            ),
            status_code=HTTPStatus.UNAUTHORIZED,
            details=details or {},
        )


class ExpenseNotFoundError(DomainError):
    """Raised when an expense does not exist for the authenticated user."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="RECORD_NOT_FOUND",
            message=message
            or compose_error_message(
                cause="Registro não encontrado.",
                action="Check the expense id and retry.",
            ),
            status_code=HTTPStatus.NOT_FOUND,
            details=details or {},
        )
