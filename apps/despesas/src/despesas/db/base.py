"""SQLAlchemy base metadata and model registration utilities."""

from importlib import import_module

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


def import_orm_models() -> None:
    """Import ORM models so metadata is fully populated."""

    modules = (
        "despesas.db.models.expense",
        "despesas.db.models.api_key",
    )
    for module_name in modules:
        import_module(module_name)
