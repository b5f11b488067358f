from .roles import PERMISSIONS, Action, Resource, Role, get_role_permissions, parse_role
from .permissions import has_permission, resolve_permission_from_request
from .routes import ROUTE_ACCESS, can_access_route

__all__ = [
    "PERMISSIONS",
    "Action",
    "Resource",
    "Role",
    "get_role_permissions",
    "parse_role",
    "has_permission",
    "resolve_permission_from_request",
    "ROUTE_ACCESS",
    "can_access_route",
]
