"""Global API exception handlers producing the ``{code, message}`` shape."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from despesas.domain.errors import DomainError, compose_error_message

logger = logging.getLogger(__name__)


def _error_payload(code: str, message: str, details: dict[str, Any]) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "code": code,
        "message": message,
    }
    if details:
        payload["details"] = details
    return payload


async def handle_domain_error(_: Request, exc: DomainError) -> JSONResponse:
    """Serialize domain error to the API error shape."""

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_payload(exc.code, exc.message, exc.details),
    )


async def handle_validation_error(
    _: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map request validation failures to HTTP 400."""

    return JSONResponse(
        status_code=HTTPStatus.BAD_REQUEST,
        content=_error_payload(
            code="VALIDATION_ERROR",
            message=compose_error_message(
                cause="Request payload validation failed.",
                action="Fix the invalid fields and send the request again.",
            ),
            details={"errors": jsonable_encoder(exc.errors())},
        ),
    )


async def handle_integrity_error(_: Request, exc: IntegrityError) -> JSONResponse:
    """Translate persistence integrity errors to domain-compatible responses."""

    error_text = str(exc.orig).lower()
    if "unique" in error_text or "duplicate" in error_text:
        return JSONResponse(
            status_code=HTTPStatus.CONFLICT,
            content=_error_payload(
                code="DUPLICATE_RECORD",
                message=compose_error_message(
                    cause="Chave de API já cadastrada.",
                    action="Issue the key again to draw a different value.",
                ),
                details={},
            ),
        )

    return JSONResponse(
        status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
        content=_error_payload(
            code="DATABASE_ERROR",
            message=compose_error_message(
                cause="A persistence constraint was violated.",
                action="Review request data consistency and retry.",
            ),
            details={},
        ),
    )


async def handle_unexpected_error(_: Request, exc: Exception) -> JSONResponse:
    """Serialize unexpected failures with generic message."""

    logger.exception("unexpected_error", exc_info=exc)
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        content=_error_payload(
            code="INTERNAL_ERROR",
            message=compose_error_message(
                cause="Erro interno do servidor.",
                action="Retry later or contact support if the error persists.",
            ),
            details={"error_type": type(exc).__name__},
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach all global handlers to the FastAPI application."""

    app.add_exception_handler(DomainError, cast(Any, handle_domain_error))
    app.add_exception_handler(
        RequestValidationError, cast(Any, handle_validation_error)
    )
    app.add_exception_handler(IntegrityError, cast(Any, handle_integrity_error))
    app.add_exception_handler(Exception, handle_unexpected_error)
