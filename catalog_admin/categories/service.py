"""Category service — categories are keyed by a slug of their title."""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from catalog_admin.logs.service import LogService
from catalog_admin.utils import serialize_mongo_doc, slugify
from catalog_admin.utils.exceptions import DuplicateError, NotFoundError, ValidationError


class CategoryService:
    def __init__(self, db: AsyncIOMotorDatabase, actor: str | None = None):
        self.db = db
        self.actor = actor
        self.categories = db["categories"]
        self.activity = LogService(db)

    async def create_category(self, data: dict) -> dict:
        """
        Create a category whose document id is the slug of its title.
        The slug is stable: renaming a category later does not move it.
        """
        slug = slugify(data["title"])
        if not slug:
            raise ValidationError("Title must contain at least one letter or digit")
        if await self.categories.find_one({"_id": slug}):
            raise DuplicateError(f"Category '{slug}' already exists")

        now = datetime.now(timezone.utc)
        doc = {"_id": slug, **data, "created_at": now, "updated_at": now}
        await self.categories.insert_one(doc)

        await self.activity.log(
            self.actor, "category_created", {"category_id": slug, "title": data["title"]}
        )
        return serialize_mongo_doc(doc)

    async def get_category(self, category_id: str) -> dict:
        category = await self.categories.find_one({"_id": category_id})
        if not category:
            raise NotFoundError("Category not found")
        return serialize_mongo_doc(category)

    async def exists(self, category_id: str) -> bool:
        return await self.categories.find_one({"_id": category_id}) is not None

    async def list_categories(self) -> list[dict]:
        cursor = self.categories.find({}).sort("title", 1)
        return [serialize_mongo_doc(c) async for c in cursor]

    async def update_category(self, category_id: str, update_data: dict) -> dict:
        clean = {k: v for k, v in update_data.items() if v is not None}
        clean["updated_at"] = datetime.now(timezone.utc)

        result = await self.categories.find_one_and_update(
            {"_id": category_id},
            {"$set": clean},
            return_document=True,
        )
        if not result:
            raise NotFoundError("Category not found")

        await self.activity.log(self.actor, "category_updated", {"category_id": category_id})
        return serialize_mongo_doc(result)

    async def delete_category(self, category_id: str) -> dict:
        result = await self.categories.delete_one({"_id": category_id})
        if result.deleted_count == 0:
            raise NotFoundError("Category not found")
        await self.activity.log(self.actor, "category_deleted", {"category_id": category_id})
        return {"message": "Category deleted successfully"}
