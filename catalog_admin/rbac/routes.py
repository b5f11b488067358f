"""Page-level access: which roles may enter which dashboard route."""

from .roles import Role, parse_role

_ALL_STAFF = frozenset({Role.MASTER, Role.ADMIN, Role.USER})
_MANAGERS = frozenset({Role.MASTER, Role.ADMIN})
_MASTER_ONLY = frozenset({Role.MASTER})

ROUTE_ACCESS: dict[str, frozenset[Role]] = {
    "/dashboard": _ALL_STAFF,
    "/dashboard/products": _ALL_STAFF,
    "/dashboard/products/new": _MANAGERS,
    "/dashboard/products/edit": _MANAGERS,
    "/dashboard/categories": _ALL_STAFF,
    "/dashboard/categories/new": _MANAGERS,
    "/dashboard/categories/edit": _MANAGERS,
    "/dashboard/users": _MASTER_ONLY,
    "/dashboard/users/edit": _MASTER_ONLY,
    "/dashboard/app-users": _MANAGERS,
    "/dashboard/logs": _MANAGERS,
    "/dashboard/inquiries": _ALL_STAFF,
    "/dashboard/notifications": _MANAGERS,
    "/dashboard/whats-new": _MANAGERS,
}

# Longest first, so the first prefix hit is the most specific one.
_PREFIXES = sorted(ROUTE_ACCESS, key=len, reverse=True)


def can_access_route(role: Role | str | None, route: str) -> bool:
    """
    Exact match first, else the longest registered prefix of `route`.
    Unknown routes and unknown roles are denied.
    """
    parsed = parse_role(role)
    if parsed is None or not route:
        return False

    allowed = ROUTE_ACCESS.get(route)
    if allowed is not None:
        return parsed in allowed

    for prefix in _PREFIXES:
        if route.startswith(prefix):
            return parsed in ROUTE_ACCESS[prefix]

    return False
