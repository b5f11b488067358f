"""
Auth + permission middleware.

Runs on every request (except PUBLIC_ROUTES / PUBLIC_PREFIXES):
  1. Decode the bearer JWT → sub, email
  2. Load the staff record for sub; reject deleted or disabled accounts
  3. Set request.state.user, request.state.user_role (the stored role)
  4. Check the (action, resource) the route needs against the role's table entry
"""

from bson import ObjectId
from fastapi import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from catalog_admin.auth.helpers import decode_access_token
from catalog_admin.config import get_database, settings
from catalog_admin.rbac import has_permission, resolve_permission_from_request
from catalog_admin.users.schemas import UserStatusEnum
from catalog_admin.utils import Logger
from catalog_admin.utils.exceptions import AuthenticationError, PermissionDeniedError

logger = Logger("auth.middleware")

# Matched against the end of the path, so they hold under any API prefix.
PUBLIC_ROUTES = [
    "/login",
    "/signup",
    "/health",
    "/openapi.json",
    "/api/docs",
    "/redoc",
]

PUBLIC_PREFIXES = [
    "/api/v1/public/",
]


def is_public(path: str) -> bool:
    return any(path.endswith(route) for route in PUBLIC_ROUTES) or any(
        path.startswith(prefix) for prefix in PUBLIC_PREFIXES
    )


def bearer_token(request: Request) -> str:
    header = request.headers.get("Authorization")
    if not header:
        raise AuthenticationError("Missing Authorization header")
    scheme, _, token = header.partition(" ")
    if scheme != "Bearer" or not token.strip():
        raise AuthenticationError("Invalid token format. Expected 'Bearer <token>'")
    return token.strip()


def _preflight(request: Request) -> JSONResponse:
    origin = request.headers.get("origin")
    allowed = settings.cors_allowed_origins
    if origin and (origin in allowed or "*" in allowed):
        allow_origin = origin
    else:
        allow_origin = allowed[0] if allowed else "*"
    return JSONResponse(
        status_code=200,
        content={"message": "CORS preflight ok"},
        headers={
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,PATCH,OPTIONS",
            "Access-Control-Allow-Headers": "Authorization,Content-Type",
            "Access-Control-Allow-Credentials": "true",
        },
    )


async def _load_staff_user(request: Request, user_id: str) -> dict:
    """The stored record behind a token subject; rejects deleted and disabled accounts."""
    # Honour test and app-level overrides of the database dependency.
    resolve = request.app.dependency_overrides.get(get_database, get_database)
    db = await resolve()

    user = None
    if ObjectId.is_valid(user_id):
        user = await db["users"].find_one({"_id": ObjectId(user_id)})
    if not user:
        raise AuthenticationError("User no longer exists")
    if user.get("status") == UserStatusEnum.DISABLED.value:
        logger.warning(f"Rejected token for disabled account {user.get('email')}")
        raise PermissionDeniedError("Account is disabled")
    return user


class AuthPermissionMiddleware(BaseHTTPMiddleware):
    """Single middleware that handles JWT verification + RBAC enforcement."""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return _preflight(request)

        path = request.url.path
        if is_public(path):
            return await call_next(request)

        # ── Authenticate ─────────────────────────────────────────
        try:
            payload = decode_access_token(bearer_token(request))
        except HTTPException as e:
            return JSONResponse(
                status_code=e.status_code,
                content={"detail": e.detail},
                headers=e.headers,
            )

        # ── Current staff record ─────────────────────────────────
        # Role and status come from the users collection; the token's copy
        # may be out of date after a master edits the account.
        try:
            user = await _load_staff_user(request, payload["sub"])
        except HTTPException as e:
            return JSONResponse(
                status_code=e.status_code,
                content={"detail": e.detail},
                headers=e.headers,
            )

        role = user.get("role")
        if role != payload.get("role"):
            logger.info(
                f"Token role {payload.get('role')} for {payload.get('email')} "
                f"superseded by stored role {role}"
            )
        payload["role"] = role
        request.state.user = payload
        request.state.user_role = role

        # ── Authorize ────────────────────────────────────────────
        required = resolve_permission_from_request(request)
        if required and not has_permission(role, *required):
            action, resource = required
            logger.warning(
                f"Denied {request.method} {path} to {payload.get('email')} (role={role})"
            )
            return JSONResponse(
                status_code=403,
                content={
                    "detail": f"Permission denied. Requires: {resource.value}:{action.value}",
                },
            )

        return await call_next(request)
