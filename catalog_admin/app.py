"""
Catalog Admin Dashboard — main application.

Assembles all packages: config, middleware, auth, catalog, content, staff.
"""

import time
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from catalog_admin.config import settings, db_manager
from catalog_admin.middleware import AuthPermissionMiddleware
from catalog_admin.utils import Logger, error_response

# ── Route imports ────────────────────────────────────────────────
from catalog_admin.auth import auth_router
from catalog_admin.users import users_router
from catalog_admin.products import products_router
from catalog_admin.categories import categories_router
from catalog_admin.app_users import app_users_router
from catalog_admin.inquiries import inquiries_router, public_inquiries_router
from catalog_admin.notifications import notifications_router
from catalog_admin.whats_new import whats_new_router
from catalog_admin.logs import logs_router
from catalog_admin.dashboard import dashboard_router

logger = Logger("request")


# ── Request Logging Middleware ───────────────────────────────────
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request: method, path, status code, and duration."""

    async def dispatch(self, request: Request, call_next):
        start = time.time()
        method = request.method
        path = request.url.path
        client = request.client.host if request.client else "unknown"

        logger.info(f"--> {method} {path} (from {client})")

        try:
            response = await call_next(request)
        except Exception as exc:
            duration = round((time.time() - start) * 1000, 2)
            logger.error(f"<-- {method} {path} | 500 | {duration}ms")
            logger.error(f"    Exception: {exc}")
            raise

        duration = round((time.time() - start) * 1000, 2)
        status = response.status_code

        if status >= 500:
            logger.error(f"<-- {method} {path} | {status} | {duration}ms")
        elif status >= 400:
            logger.warning(f"<-- {method} {path} | {status} | {duration}ms")
        else:
            logger.info(f"<-- {method} {path} | {status} | {duration}ms")

        return response


# ── Lifespan ─────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    await db_manager.connect()
    yield
    db_manager.close()


# ── App factory ──────────────────────────────────────────────────
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Product catalog, staff and companion-app administration",
        docs_url="/api/docs",
        lifespan=lifespan,
    )

    # Starlette runs the last-added middleware first: auth sits innermost,
    # request logging wraps it, CORS wraps everything.

    # ── Auth + RBAC middleware ───────────────────────────────
    app.add_middleware(AuthPermissionMiddleware)

    # ── Request logging (runs on every request) ──────────────
    app.add_middleware(RequestLoggingMiddleware)

    # ── CORS ─────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allowed_methods,
        allow_headers=settings.cors_allowed_headers,
    )

    # ── Global exception handler ─────────────────────────────
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.method} {request.url.path}:")
        logger.error(traceback.format_exc())
        return error_response(
            str(exc) if settings.debug else "Internal server error",
            code=500,
        )

    # ── Routes ───────────────────────────────────────────────
    v = settings.api_version  # "v1"

    app.include_router(auth_router, prefix=f"/api/{v}/auth", tags=["Authentication"])
    app.include_router(dashboard_router, prefix=f"/api/{v}/dashboard", tags=["Dashboard"])
    app.include_router(products_router, prefix=f"/api/{v}/products", tags=["Products"])
    app.include_router(categories_router, prefix=f"/api/{v}/categories", tags=["Categories"])
    app.include_router(users_router, prefix=f"/api/{v}/users", tags=["Staff Users"])
    app.include_router(app_users_router, prefix=f"/api/{v}/app-users", tags=["App Users"])
    app.include_router(inquiries_router, prefix=f"/api/{v}/inquiries", tags=["Inquiries"])
    app.include_router(
        public_inquiries_router,
        prefix=f"/api/{v}/public",
        tags=["Public"],
    )
    app.include_router(
        notifications_router,
        prefix=f"/api/{v}/notifications",
        tags=["Notifications"],
    )
    app.include_router(whats_new_router, prefix=f"/api/{v}/whats-new", tags=["What's New"])
    app.include_router(logs_router, prefix=f"/api/{v}/logs", tags=["Activity Logs"])

    # ── Health check ─────────────────────────────────────────
    @app.get("/health")
    async def health():
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.app_version,
            "database": db_manager.is_connected,
        }

    return app


# ── Create the app instance ──────────────────────────────────────
app = create_app()
