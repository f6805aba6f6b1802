"""FastAPI application factory for the REST façade."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.ai.service import AIService
from src.api.routes import API_VERSION, router
from src.core.config import Settings


def create_app(service: AIService, settings: Settings | None = None) -> FastAPI:
    """Build the app around an already-configured AI service.

    The service is stored on ``app.state`` and handed to routes through a
    dependency, so tests can pass in a service with fake providers.
    """
    settings = settings or Settings()

    app = FastAPI(title="letsmcp", version=API_VERSION)
    app.state.ai_service = service
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "server": "letsmcp", "version": API_VERSION}

    app.include_router(router, prefix="/api")
    return app
