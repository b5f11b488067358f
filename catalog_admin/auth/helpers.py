"""Low-level auth helpers: bcrypt password hashing and staff JWTs."""

from datetime import datetime, timedelta, timezone

from passlib.context import CryptContext
from jose import JWTError, jwt

from catalog_admin.config import settings
from catalog_admin.utils.exceptions import AuthenticationError

# ── Password hashing ────────────────────────────────────────────
_pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain: str) -> str:
    return _pwd_ctx.hash(plain)


def verify_password(plain: str, hashed: str | None) -> bool:
    """False for a wrong password and for a stored value that is not a hash."""
    if not hashed:
        return False
    try:
        return _pwd_ctx.verify(plain, hashed)
    except ValueError:
        return False


def rehash_if_needed(plain: str, hashed: str) -> str | None:
    """
    A fresh hash when `hashed` was made with a deprecated scheme or cost,
    else None. Only call after `verify_password` succeeded.
    """
    if _pwd_ctx.needs_update(hashed):
        return _pwd_ctx.hash(plain)
    return None


# ── JWT ──────────────────────────────────────────────────────────
# Claims a staff token must carry; role may be absent (treated as no access).
REQUIRED_CLAIMS = ("sub", "email")


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """
    Sign `data` as a JWT, adding `iat` and `exp`.

    AuthService puts sub (user id), email, role and permissions in `data`.
    """
    now = datetime.now(timezone.utc)
    to_encode = {
        **data,
        "iat": now,
        "exp": now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes)),
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> dict:
    """Verify signature, expiry and required claims. Raises AuthenticationError."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise AuthenticationError("Invalid or expired token")

    missing = [claim for claim in REQUIRED_CLAIMS if not payload.get(claim)]
    if missing:
        raise AuthenticationError(f"Token is missing {', '.join(missing)}")
    return payload
