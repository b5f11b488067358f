from pydantic import BaseModel, Field, EmailStr, field_validator
from typing import Optional
from enum import Enum
import re

from catalog_admin.rbac import Role


class UserStatusEnum(str, Enum):
    ACTIVE = "active"
    DISABLED = "disabled"


class NotificationPreferences(BaseModel):
    sms: bool = False
    email: bool = True
    whatsapp: bool = False


def _clean_phone(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    cleaned = re.sub(r"[\s\-\(\)]", "", v)
    if not cleaned.replace("+", "").isdigit():
        raise ValueError("Invalid phone number format")
    return cleaned


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, min_length=10, max_length=15)
    password: str = Field(..., min_length=6)
    role: Role = Role.USER
    status: UserStatusEnum = UserStatusEnum.ACTIVE
    notifications_enabled: NotificationPreferences = NotificationPreferences()

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return _clean_phone(v)


class UpdateUserRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    phone: Optional[str] = None
    role: Optional[Role] = None
    status: Optional[UserStatusEnum] = None
    notifications_enabled: Optional[NotificationPreferences] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return _clean_phone(v)
