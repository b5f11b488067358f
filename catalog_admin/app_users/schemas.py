from pydantic import BaseModel


class AuthenticationUpdateRequest(BaseModel):
    """Approve (or revoke) a mobile-app account."""
    is_authenticated: bool
