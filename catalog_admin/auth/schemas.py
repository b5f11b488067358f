from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class LoginRequest(BaseModel):
    """POST /auth/login"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class SignupRequest(BaseModel):
    """POST /auth/signup — creates a staff account awaiting approval."""
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=15)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: dict


class RouteAccessResponse(BaseModel):
    path: str
    role: Optional[str] = None
    allowed: bool
