"""App user service — accounts of the companion mobile app."""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId

from catalog_admin.logs.service import LogService
from catalog_admin.utils import serialize_mongo_doc
from catalog_admin.utils.exceptions import NotFoundError
from .mailer import EmailService

# Never returned to the dashboard.
_PRIVATE_FIELDS = ("hashed_password", "hashedPassword", "password")


def _public_app_user(doc: dict) -> dict:
    safe = serialize_mongo_doc(doc)
    for field in _PRIVATE_FIELDS:
        safe.pop(field, None)
    return safe


class AppUserService:
    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        actor: str | None = None,
        mailer: EmailService | None = None,
    ):
        self.db = db
        self.actor = actor
        self.app_users = db["app_users"]
        self.activity = LogService(db)
        self.mailer = mailer or EmailService()

    def _object_id(self, app_user_id: str) -> ObjectId:
        if not ObjectId.is_valid(app_user_id):
            raise NotFoundError("App user not found")
        return ObjectId(app_user_id)

    async def list_app_users(
        self,
        authenticated: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[dict], int]:
        filters: dict = {}
        if authenticated is not None:
            filters["is_authenticated"] = authenticated
        total = await self.app_users.count_documents(filters)
        cursor = self.app_users.find(filters).sort("created_at", -1).skip(offset).limit(limit)
        return [_public_app_user(u) async for u in cursor], total

    async def get_app_user(self, app_user_id: str) -> dict:
        user = await self.app_users.find_one({"_id": self._object_id(app_user_id)})
        if not user:
            raise NotFoundError("App user not found")
        return _public_app_user(user)

    async def set_authentication(self, app_user_id: str, is_authenticated: bool) -> dict:
        """
        Approve or revoke an app account. Approval mails the user; a mail
        failure is logged by the mailer and does not undo the approval.
        """
        result = await self.app_users.find_one_and_update(
            {"_id": self._object_id(app_user_id)},
            {
                "$set": {
                    "is_authenticated": is_authenticated,
                    "updated_at": datetime.now(timezone.utc),
                }
            },
            return_document=True,
        )
        if not result:
            raise NotFoundError("App user not found")

        await self.activity.log(
            self.actor,
            "app_user_authenticated" if is_authenticated else "app_user_unauthenticated",
            {"app_user_id": app_user_id},
        )

        email_sent = False
        if is_authenticated and result.get("email"):
            email_sent = await self.mailer.send_authenticated_email(
                result["email"], result.get("first_name"), result.get("last_name")
            )

        user = _public_app_user(result)
        user["email_sent"] = email_sent
        return user
