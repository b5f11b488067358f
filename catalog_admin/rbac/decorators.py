"""
Handler-level permission guard.

The middleware already rejects requests whose (method, module) pair the role
may not perform. Handlers still state their own requirement, so a route that
is mounted somewhere the middleware cannot map (or whose action differs from
its HTTP method) stays protected:

    @router.put("/{app_user_id}/authentication")
    @require_permission(Action.UPDATE, Resource.APP_USERS)
    async def update_authentication(request: Request, ...):
        ...
"""

from functools import wraps

from starlette.requests import Request

from catalog_admin.utils import Logger
from catalog_admin.utils.exceptions import PermissionDeniedError
from .permissions import has_permission
from .roles import Action, Resource

logger = Logger("rbac")


def _find_request(args: tuple, kwargs: dict) -> Request | None:
    request = kwargs.get("request")
    if isinstance(request, Request):
        return request
    return next((a for a in args if isinstance(a, Request)), None)


def require_permission(action: Action, resource: Resource):
    """
    Deny the call unless `request.state.user_role` grants `action` on
    `resource`. The handler must take a `request: Request` parameter, and
    the decorator goes below the route decorator.
    """
    required = f"{resource.value}:{action.value}"

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = _find_request(args, kwargs)
            if request is None:
                raise RuntimeError(
                    f"{func.__name__} is guarded by require_permission but takes no Request"
                )

            role = getattr(request.state, "user_role", None)
            if not has_permission(role, action, resource):
                user = getattr(request.state, "user", None) or {}
                logger.warning(f"Denied {required} to {user.get('email')} (role={role})")
                raise PermissionDeniedError(f"Permission denied. Requires: {required}")

            return await func(*args, **kwargs)

        return wrapper

    return decorator
