"""API key lifecycle: issuance, rotation and authentication."""

from __future__ import annotations

import logging
from typing import Protocol

from despesas.db.models.api_key import ApiKey
from despesas.domain.api_keys import generate_api_key, is_well_formed_api_key
from despesas.domain.errors import (
    InvalidApiKeyError,
    InvalidRequestError,
    compose_error_message,
)
from despesas.services.expense_service import SessionProtocol

logger = logging.getLogger(__name__)


class ApiKeyRepositoryProtocol(Protocol):
    """API key repository contract consumed by service."""

    def get_active_by_key(self, api_key: str) -> ApiKey | None: ...

    def get_active_for_user(self, user_mail: str) -> ApiKey | None: ...

    def add(self, api_key: ApiKey) -> ApiKey: ...

    def revoke_for_user(self, user_mail: str) -> int: ...


class ApiKeyService:
    """Issues one active key per user and resolves keys back to users."""

    def __init__(
        self,
        *,
        api_key_repository: ApiKeyRepositoryProtocol,
        session: SessionProtocol,
    ) -> None:
        self._api_key_repository = api_key_repository
        self._session = session

    def get_or_issue(self, user_mail: str) -> ApiKey:
        user_mail = _normalize_mail(user_mail)
        existing = self._api_key_repository.get_active_for_user(user_mail)
        if existing is not None:
            return existing
        return self._issue(user_mail)

    def rotate(self, user_mail: str) -> ApiKey:
        user_mail = _normalize_mail(user_mail)
        try:
            revoked = self._api_key_repository.revoke_for_user(user_mail)
        except Exception:
            self._session.rollback()
            raise
        logger.info(
            "api_key_revoked", extra={"user_mail": user_mail, "revoked": revoked}
        )
        return self._issue(user_mail)

    def authenticate(self, api_key: str | None) -> str:
        """Return the owner e-mail of an active key."""

        if not is_well_formed_api_key(api_key):
            logger.warning("api_key_rejected", extra={"reason": "malformed"})
            raise InvalidApiKeyError()

        record = self._api_key_repository.get_active_by_key(str(api_key))
        if record is None:
            logger.warning("api_key_rejected", extra={"reason": "unknown_or_revoked"})
            raise InvalidApiKeyError()
        return record.user_mail

    def _issue(self, user_mail: str) -> ApiKey:
        try:
            record = self._api_key_repository.add(
                ApiKey(user_mail=user_mail, api_key=generate_api_key(), revoked=False)
            )
            self._session.commit()
            self._session.refresh(record)
        except Exception:
            self._session.rollback()
            raise

        logger.info("api_key_issued", extra={"user_mail": user_mail})
        return record


def _normalize_mail(user_mail: str) -> str:
    normalized = user_mail.strip().lower()
    if "@" not in normalized or normalized.startswith("@") or normalized.endswith("@"):
        raise InvalidRequestError(
            message=compose_error_message(
                cause="Email inválido.",
                action="Provide the e-mail address used to sign in.",
            ),
            details={"user_mail": user_mail},
        )
    return normalized
