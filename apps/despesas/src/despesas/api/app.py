"""FastAPI app bootstrap for despesas."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from despesas.api.error_handlers import register_error_handlers
from despesas.api.routes import api_router
from despesas.core.logging import configure_logging
from despesas.db.session import get_db_session


def create_app() -> FastAPI:
    """Create and configure FastAPI application instance."""

    configure_logging()
    app = FastAPI(
        title="Despesas API",
        version="0.1.0",
    )

    @app.get("/health/live", include_in_schema=False)
    def health_live() -> dict[str, str]:
        return {"status": "alive"}

    @app.get("/health/ready", include_in_schema=False)
    def health_ready(
        db_session: Annotated[Session, Depends(get_db_session)],
    ) -> dict[str, str]:
        try:
            db_session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Database is unavailable",
            ) from exc
        return {"status": "ready"}

    register_error_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
