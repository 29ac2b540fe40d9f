"""
PetStoreApp - Web front end
Renders the Pet Store pages and proxies the pet, product and order services
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from petstoreapp.api import web
from petstoreapp.core.cache import TTLCache
from petstoreapp.core.config import Settings, settings as default_settings
from petstoreapp.core.logging_config import configure_logging
from petstoreapp.core.session import SessionStore
from petstoreapp.domain.environment import ContainerEnvironment

logger = logging.getLogger(__name__)

SESSION_COOKIE = "PETSTORESESSION"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    app.state.http_client = httpx.AsyncClient(
        transport=app.state.http_transport,
        timeout=settings.DOWNSTREAM_TIMEOUT_SECONDS,
    )
    logger.info(
        f"PetStoreApp {settings.APP_VERSION} starting on {app.state.environment.container_host_name}"
    )
    try:
        yield
    finally:
        await app.state.http_client.aclose()


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        settings: Settings to use (defaults to the environment)
        transport: httpx transport for downstream calls (tests pass a MockTransport)
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.APP_VERSION,
        description=settings.API_DESCRIPTION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.environment = ContainerEnvironment.from_settings(settings)
    app.state.session_store = SessionStore(settings.SESSION_TTL_SECONDS)
    app.state.current_users = TTLCache(settings.CURRENT_USERS_TTL_SECONDS)
    app.state.http_transport = transport

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        session_cookie=SESSION_COOKIE,
        max_age=settings.SESSION_TTL_SECONDS,
    )

    @app.get("/health")
    async def health(request: Request):
        """Health check endpoint for monitoring"""
        return {
            "status": "healthy",
            "service": "petstoreapp",
            "version": settings.APP_VERSION,
            "currentUsersOnSite": len(request.app.state.current_users),
        }

    # page routes last: the landing route catches everything else
    app.include_router(web.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.API_HOST, port=default_settings.API_PORT)
