"""
Broadcast services — messages the companion mobile app shows its users.

Notifications and what's-new entries share one document shape
({name, description, image, link, time}); each lives in its own collection.
"""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId

from catalog_admin.logs.service import LogService
from catalog_admin.utils import serialize_mongo_doc
from catalog_admin.utils.exceptions import NotFoundError


class BroadcastService:
    collection_name: str = ""
    kind: str = ""

    def __init__(self, db: AsyncIOMotorDatabase, actor: str | None = None):
        self.db = db
        self.actor = actor
        self.items = db[self.collection_name]
        self.activity = LogService(db)

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.kind.replace('_', ' ').capitalize()} not found")

    def _object_id(self, item_id: str) -> ObjectId:
        if not ObjectId.is_valid(item_id):
            raise self._not_found()
        return ObjectId(item_id)

    async def create(self, data: dict) -> dict:
        doc = {**data, "time": datetime.now(timezone.utc)}
        result = await self.items.insert_one(doc)
        doc["_id"] = result.inserted_id
        await self.activity.log(
            self.actor,
            f"{self.kind}_created",
            {f"{self.kind}_id": str(result.inserted_id), "name": data["name"]},
        )
        return serialize_mongo_doc(doc)

    async def get(self, item_id: str) -> dict:
        item = await self.items.find_one({"_id": self._object_id(item_id)})
        if not item:
            raise self._not_found()
        return serialize_mongo_doc(item)

    async def list_items(self, limit: int = 50, offset: int = 0) -> tuple[list[dict], int]:
        """Newest first."""
        total = await self.items.count_documents({})
        cursor = self.items.find({}).sort("time", -1).skip(offset).limit(limit)
        return [serialize_mongo_doc(i) async for i in cursor], total

    async def update(self, item_id: str, update_data: dict) -> dict:
        clean = {k: v for k, v in update_data.items() if v is not None}
        if not clean:
            return await self.get(item_id)

        result = await self.items.find_one_and_update(
            {"_id": self._object_id(item_id)},
            {"$set": clean},
            return_document=True,
        )
        if not result:
            raise self._not_found()
        await self.activity.log(self.actor, f"{self.kind}_updated", {f"{self.kind}_id": item_id})
        return serialize_mongo_doc(result)

    async def delete(self, item_id: str) -> dict:
        result = await self.items.delete_one({"_id": self._object_id(item_id)})
        if result.deleted_count == 0:
            raise self._not_found()
        await self.activity.log(self.actor, f"{self.kind}_deleted", {f"{self.kind}_id": item_id})
        return {"message": "Deleted successfully"}


class NotificationService(BroadcastService):
    collection_name = "notifications"
    kind = "notification"
