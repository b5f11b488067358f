"""Authentication service — staff login, signup and the authoritative profile."""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId

from catalog_admin.rbac import Role, get_role_permissions
from catalog_admin.users.schemas import UserStatusEnum
from catalog_admin.utils import Logger, serialize_mongo_doc
from catalog_admin.utils.exceptions import (
    AuthenticationError,
    DuplicateError,
    NotFoundError,
    PermissionDeniedError,
)
from .helpers import create_access_token, hash_password, rehash_if_needed, verify_password

logger = Logger("auth")


def _public_user(user: dict) -> dict:
    safe = serialize_mongo_doc(user)
    safe.pop("password", None)
    return safe


class AuthService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users = db["users"]

    async def verify_credentials(self, email: str, password: str) -> dict:
        """
        Look up the staff record by email and check the password.

        Returns the record without its password hash. Raises
        AuthenticationError for an unknown email or a wrong password and
        PermissionDeniedError for a disabled account.
        """
        user = await self.users.find_one({"email": email.lower()})
        if not user or not verify_password(password, user.get("password", "")):
            logger.warning(f"Failed login for {email}")
            raise AuthenticationError()

        if user.get("status") == UserStatusEnum.DISABLED.value:
            raise PermissionDeniedError("Account is disabled")

        upgraded = rehash_if_needed(password, user["password"])
        if upgraded:
            await self.users.update_one({"_id": user["_id"]}, {"$set": {"password": upgraded}})
            logger.info(f"Upgraded password hash for {user['email']}")

        return _public_user(user)

    async def authenticate(self, email: str, password: str) -> dict:
        """Verify credentials, stamp last_login and issue a JWT."""
        user = await self.verify_credentials(email, password)
        role = user.get("role", Role.PENDING.value)

        token = create_access_token(
            data={
                "sub": user["id"],
                "email": user["email"],
                "role": role,
                "permissions": get_role_permissions(role),
            }
        )

        await self.users.update_one(
            {"_id": ObjectId(user["id"])},
            {"$set": {"last_login": datetime.now(timezone.utc)}},
        )
        logger.info(f"Login {user['email']} as {role}")

        return {
            "access_token": token,
            "token_type": "bearer",
            "user": user,
        }

    async def signup(self, data: dict) -> dict:
        """Create a staff account with the `pending` role."""
        email = data["email"].lower()
        if await self.users.find_one({"email": email}):
            raise DuplicateError("User with this email already exists")

        now = datetime.now(timezone.utc)
        user_doc = {
            "email": email,
            "password": hash_password(data["password"]),
            "name": data.get("name"),
            "phone": data.get("phone"),
            "role": Role.PENDING.value,
            "status": UserStatusEnum.ACTIVE.value,
            "notifications_enabled": {"sms": False, "email": True, "whatsapp": False},
            "created_at": now,
            "updated_at": now,
        }
        result = await self.users.insert_one(user_doc)
        user_doc["_id"] = result.inserted_id
        logger.info(f"Signup {email} awaiting approval")
        return _public_user(user_doc)

    async def me(self, user_id: str) -> dict:
        """The authoritative record behind a token subject."""
        if not ObjectId.is_valid(user_id):
            raise NotFoundError("User not found")
        user = await self.users.find_one({"_id": ObjectId(user_id)})
        if not user:
            raise NotFoundError("User not found")
        profile = _public_user(user)
        profile["permissions"] = get_role_permissions(profile.get("role"))
        return profile
