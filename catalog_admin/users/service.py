"""User service — staff accounts of the dashboard."""

import re
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId

from catalog_admin.auth.helpers import hash_password
from catalog_admin.logs.service import LogService
from catalog_admin.utils import serialize_mongo_doc
from catalog_admin.utils.exceptions import DuplicateError, NotFoundError


def _public_user(user: dict) -> dict:
    safe = serialize_mongo_doc(user)
    safe.pop("password", None)
    return safe


def _enum_values(data: dict) -> dict:
    return {k: getattr(v, "value", v) for k, v in data.items()}


class UserService:
    def __init__(self, db: AsyncIOMotorDatabase, actor: str | None = None):
        self.db = db
        self.actor = actor
        self.users = db["users"]
        self.activity = LogService(db)

    def _object_id(self, user_id: str) -> ObjectId:
        if not ObjectId.is_valid(user_id):
            raise NotFoundError("User not found")
        return ObjectId(user_id)

    async def create_user(self, data: dict) -> dict:
        """Create a staff user. Hashes the password and checks email uniqueness."""
        data = _enum_values(data)
        data["email"] = data["email"].lower()
        if await self.users.find_one({"email": data["email"]}):
            raise DuplicateError("User with this email already exists")

        now = datetime.now(timezone.utc)
        user_doc = {
            **data,
            "password": hash_password(data["password"]),
            "created_at": now,
            "updated_at": now,
        }
        result = await self.users.insert_one(user_doc)
        user_doc["_id"] = result.inserted_id

        await self.activity.log(
            self.actor, "user_created", {"user_id": str(result.inserted_id), "role": data["role"]}
        )
        return _public_user(user_doc)

    async def get_user(self, user_id: str) -> dict:
        user = await self.users.find_one({"_id": self._object_id(user_id)})
        if not user:
            raise NotFoundError("User not found")
        return _public_user(user)

    async def list_users(
        self,
        query: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[dict], int]:
        """List users with optional search by name or email."""
        filters: dict = {}
        if query:
            pattern = re.escape(query)
            filters["$or"] = [
                {"name": {"$regex": pattern, "$options": "i"}},
                {"email": {"$regex": pattern, "$options": "i"}},
            ]

        total = await self.users.count_documents(filters)
        cursor = self.users.find(filters).sort("created_at", -1).skip(offset).limit(limit)
        users = [_public_user(u) async for u in cursor]
        return users, total

    async def update_user(self, user_id: str, update_data: dict) -> dict:
        """
        Update profile fields, role or status. A changed role or status is
        picked up by the affected user's dashboard on its next reconciliation.
        """
        clean = {k: v for k, v in _enum_values(update_data).items() if v is not None}
        clean["updated_at"] = datetime.now(timezone.utc)

        result = await self.users.find_one_and_update(
            {"_id": self._object_id(user_id)},
            {"$set": clean},
            return_document=True,
        )
        if not result:
            raise NotFoundError("User not found")

        changed = sorted(k for k in clean if k != "updated_at")
        await self.activity.log(
            self.actor, "user_updated", {"user_id": user_id, "fields": changed}
        )
        return _public_user(result)

    async def delete_user(self, user_id: str) -> dict:
        result = await self.users.delete_one({"_id": self._object_id(user_id)})
        if result.deleted_count == 0:
            raise NotFoundError("User not found")
        await self.activity.log(self.actor, "user_deleted", {"user_id": user_id})
        return {"message": "User deleted successfully"}
