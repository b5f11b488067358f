"""
Role definitions and permission matrix.

A permission is an (action, resource) pair. Every role maps to a fixed set of
pairs; anything absent from the set is denied. There is no role inheritance
and no wildcard: the table below is the whole policy.

  master  — everything, including staff user management
  admin   — catalog + content management, read-only staff users
  user    — read-only catalog, inquiries and content
  pending — freshly signed-up staff awaiting approval; no entry, no access
"""

from enum import Enum


class Role(str, Enum):
    MASTER = "master"
    ADMIN = "admin"
    USER = "user"
    PENDING = "pending"


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class Resource(str, Enum):
    PRODUCTS = "products"
    CATEGORIES = "categories"
    USERS = "users"
    LOGS = "logs"
    INQUIRIES = "inquiries"
    APP_USERS = "app_users"
    NOTIFICATIONS = "notifications"
    WHATS_NEW = "whats_new"


def _grants(**by_action: tuple[Resource, ...]) -> frozenset[tuple[Action, Resource]]:
    return frozenset(
        (Action(action), resource)
        for action, resources in by_action.items()
        for resource in resources
    )


R = Resource

PERMISSIONS: dict[Role, frozenset[tuple[Action, Resource]]] = {
    Role.MASTER: _grants(
        create=(R.PRODUCTS, R.CATEGORIES, R.USERS, R.NOTIFICATIONS, R.WHATS_NEW),
        read=(
            R.PRODUCTS, R.CATEGORIES, R.USERS, R.LOGS,
            R.INQUIRIES, R.APP_USERS, R.NOTIFICATIONS, R.WHATS_NEW,
        ),
        update=(
            R.PRODUCTS, R.CATEGORIES, R.USERS, R.INQUIRIES,
            R.APP_USERS, R.NOTIFICATIONS, R.WHATS_NEW,
        ),
        delete=(R.PRODUCTS, R.CATEGORIES, R.USERS, R.NOTIFICATIONS, R.WHATS_NEW),
    ),
    Role.ADMIN: _grants(
        create=(R.PRODUCTS, R.CATEGORIES, R.NOTIFICATIONS, R.WHATS_NEW),
        read=(
            R.PRODUCTS, R.CATEGORIES, R.USERS, R.LOGS,
            R.INQUIRIES, R.APP_USERS, R.NOTIFICATIONS, R.WHATS_NEW,
        ),
        update=(
            R.PRODUCTS, R.CATEGORIES, R.INQUIRIES,
            R.APP_USERS, R.NOTIFICATIONS, R.WHATS_NEW,
        ),
        delete=(R.PRODUCTS, R.CATEGORIES, R.NOTIFICATIONS, R.WHATS_NEW),
    ),
    Role.USER: _grants(
        read=(R.PRODUCTS, R.CATEGORIES, R.INQUIRIES, R.NOTIFICATIONS, R.WHATS_NEW),
    ),
}


def parse_role(role: "Role | str | None") -> Role | None:
    """Return the Role for `role`, or None when it is absent or unknown."""
    if role is None or role == "":
        return None
    try:
        return Role(role)
    except ValueError:
        return None


def get_role_permissions(role: "Role | str | None") -> list[str]:
    """Return the sorted "{resource}:{action}" strings granted to a role."""
    parsed = parse_role(role)
    grants = PERMISSIONS.get(parsed, frozenset()) if parsed else frozenset()
    return sorted(f"{resource.value}:{action.value}" for action, resource in grants)
