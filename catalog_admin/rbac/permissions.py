"""
Permission checking utilities.

`has_permission` is the authoritative resource-level check. It is a pure
table lookup, safe to call on every request. `resolve_permission_from_request`
derives the (action, resource) pair an API request needs.
"""

from starlette.requests import Request

from .roles import PERMISSIONS, Action, Resource, Role, parse_role


# ── Map URL path segments to resources ───────────────────────────
MODULE_MAP: dict[str, Resource] = {
    "products": Resource.PRODUCTS,
    "categories": Resource.CATEGORIES,
    "users": Resource.USERS,
    "logs": Resource.LOGS,
    "inquiries": Resource.INQUIRIES,
    "app-users": Resource.APP_USERS,
    "notifications": Resource.NOTIFICATIONS,
    "whats-new": Resource.WHATS_NEW,
}

# ── Map HTTP methods to RBAC actions ─────────────────────────────
METHOD_TO_ACTION: dict[str, Action] = {
    "GET": Action.READ,
    "POST": Action.CREATE,
    "PUT": Action.UPDATE,
    "PATCH": Action.UPDATE,
    "DELETE": Action.DELETE,
}


def has_permission(
    role: Role | str | None,
    action: Action | str,
    resource: Resource | str,
) -> bool:
    """
    True when `role` may perform `action` on `resource`.

    Absent, null or unknown roles, roles without a table entry, and unknown
    actions or resources are all denied.
    """
    parsed = parse_role(role)
    if parsed is None:
        return False

    grants = PERMISSIONS.get(parsed)
    if not grants:
        return False

    try:
        pair = (Action(action), Resource(resource))
    except ValueError:
        return False

    return pair in grants


def resolve_permission_from_request(
    request: Request,
) -> tuple[Action, Resource] | None:
    """
    Derive the required (action, resource) from the request.

    URL pattern expected:  /api/{version}/{module}/...
    Returns None when the module is not a guarded resource.
    """
    path_parts = request.url.path.strip("/").split("/")
    # path_parts = ["api", "v1", "products", ...]
    module_name = path_parts[2] if len(path_parts) > 2 else None
    resource = MODULE_MAP.get(module_name) if module_name else None
    action = METHOD_TO_ACTION.get(request.method)

    if not resource or not action:
        return None

    return action, resource
