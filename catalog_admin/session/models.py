"""The dashboard's locally held view of the signed-in staff member."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from catalog_admin.rbac import Role
from catalog_admin.users.schemas import UserStatusEnum


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FRESH = "authenticated_fresh"
    CHECK_PENDING = "authenticated_stale_check_pending"
    TERMINATING = "terminating"


class Session(BaseModel):
    """
    Last-known copy of the staff record. `role` and `status` may lag the
    users collection until the next reconciliation pass.

    `role` stays a plain string: the record is copied as stored, and
    authorization decisions go through `has_permission`, which denies
    anything it does not recognise.
    """

    uid: str
    email: str
    role: str = Role.PENDING.value
    status: str = UserStatusEnum.ACTIVE.value
    name: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_record(cls, record: dict) -> "Session":
        """Project a users-collection document (raw or serialized) onto a Session."""
        uid = record.get("_id", record.get("id"))
        return cls(
            uid=str(uid),
            email=record["email"],
            role=record.get("role") or Role.PENDING.value,
            status=record.get("status") or UserStatusEnum.ACTIVE.value,
            name=record.get("name") or None,
            phone=record.get("phone") or None,
        )

    @property
    def is_disabled(self) -> bool:
        return self.status == UserStatusEnum.DISABLED.value
