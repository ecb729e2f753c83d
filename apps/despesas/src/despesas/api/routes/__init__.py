"""API router registration."""

from fastapi import APIRouter

from despesas.api.routes import amounts, expenses

api_router = APIRouter(prefix="/api")
api_router.include_router(expenses.router)
api_router.include_router(amounts.router)
