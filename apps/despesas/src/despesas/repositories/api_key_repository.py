"""API key persistence operations."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from despesas.db.models.api_key import ApiKey


class ApiKeyRepository:
    """Lookup, issuance and revocation of user API keys."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_active_by_key(self, api_key: str) -> ApiKey | None:
        statement = select(ApiKey).where(
            ApiKey.api_key == api_key,
            ApiKey.revoked.is_(False),
        )
        return self._session.scalar(statement)

    def get_active_for_user(self, user_mail: str) -> ApiKey | None:
        statement = (
            select(ApiKey)
            .where(
                ApiKey.user_mail == user_mail,
                ApiKey.revoked.is_(False),
            )
            .order_by(ApiKey.created_at.desc())
            .limit(1)
        )
        return self._session.scalar(statement)

    def add(self, api_key: ApiKey) -> ApiKey:
        self._session.add(api_key)
        self._session.flush()
        return api_key

    def revoke_for_user(self, user_mail: str) -> int:
        statement = (
            update(ApiKey)
            .where(
                ApiKey.user_mail == user_mail,
                ApiKey.revoked.is_(False),
            )
            .values(revoked=True)
        )
        result = self._session.execute(statement)
        return int(result.rowcount or 0)
