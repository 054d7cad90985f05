"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agentxmap.api.errors import register_exception_handlers
from agentxmap.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from agentxmap.api.routes import auth
from agentxmap.core.config import get_settings
from agentxmap.core.database import AsyncSessionLocal
from agentxmap.core.structured_logging import configure_logging
from agentxmap.services.bootstrap import ensure_initial_admin

settings = get_settings()
configure_logging(settings.log_level)

docs_enabled = settings.api_docs_enabled
if docs_enabled is None:
    docs_enabled = settings.environment != "production"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await ensure_initial_admin(AsyncSessionLocal, settings)
    yield


app = FastAPI(
    title="agentXmap Admin API",
    description="Organization, identity and invitation API for agentXmap",
    version="1.0.0",
    docs_url="/api/docs" if docs_enabled else None,
    redoc_url=None,
    openapi_url="/api/openapi.json" if docs_enabled else None,
    lifespan=lifespan,
)

# Middleware is applied in reverse order of registration
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

register_exception_handlers(app)


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
