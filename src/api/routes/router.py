"""Agregador de rotas.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.interactions.router import router as interactions_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados.

    Returns:
        APIRouter configurado com todos os endpoints.
    """
    api_router = APIRouter()

    # Health check (GET /)
    api_router.include_router(health_router, tags=["health"])

    # Interações do Discord (POST /)
    api_router.include_router(interactions_router, tags=["interactions"])

    return api_router
