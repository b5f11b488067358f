"""Product service — CRUD on the products collection."""

import re
from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId

from catalog_admin.categories.service import CategoryService
from catalog_admin.logs.service import LogService
from catalog_admin.utils import serialize_mongo_doc
from catalog_admin.utils.exceptions import NotFoundError


class ProductService:
    def __init__(self, db: AsyncIOMotorDatabase, actor: str | None = None):
        self.db = db
        self.actor = actor
        self.products = db["products"]
        self.categories = CategoryService(db)
        self.activity = LogService(db)

    def _object_id(self, product_id: str) -> ObjectId:
        if not ObjectId.is_valid(product_id):
            raise NotFoundError("Product not found")
        return ObjectId(product_id)

    async def _require_category(self, category_id: str) -> None:
        if not await self.categories.exists(category_id):
            raise NotFoundError(f"Category '{category_id}' not found")

    async def create_product(self, data: dict) -> dict:
        await self._require_category(data["category_id"])

        now = datetime.now(timezone.utc)
        doc = {**data, "created_at": now, "updated_at": now}
        result = await self.products.insert_one(doc)
        doc["_id"] = result.inserted_id

        await self.activity.log(
            self.actor,
            "product_created",
            {"product_id": str(result.inserted_id), "title": data["title"]},
        )
        return serialize_mongo_doc(doc)

    async def get_product(self, product_id: str) -> dict:
        product = await self.products.find_one({"_id": self._object_id(product_id)})
        if not product:
            raise NotFoundError("Product not found")
        return serialize_mongo_doc(product)

    async def list_products(
        self,
        category_id: Optional[str] = None,
        query: Optional[str] = None,
        featured: Optional[bool] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[dict], int]:
        """List products, filtered by category, featured flag or title search."""
        filters: dict = {}
        if category_id:
            filters["category_id"] = category_id
        if featured is not None:
            filters["featured"] = featured
        if query:
            pattern = re.escape(query)
            filters["$or"] = [
                {"title": {"$regex": pattern, "$options": "i"}},
                {"material_number": {"$regex": pattern, "$options": "i"}},
            ]

        total = await self.products.count_documents(filters)
        cursor = self.products.find(filters).sort("created_at", -1).skip(offset).limit(limit)
        products = [serialize_mongo_doc(p) async for p in cursor]
        return products, total

    async def update_product(self, product_id: str, update_data: dict) -> dict:
        clean = {k: v for k, v in update_data.items() if v is not None}
        if "category_id" in clean:
            await self._require_category(clean["category_id"])
        clean["updated_at"] = datetime.now(timezone.utc)

        result = await self.products.find_one_and_update(
            {"_id": self._object_id(product_id)},
            {"$set": clean},
            return_document=True,
        )
        if not result:
            raise NotFoundError("Product not found")

        await self.activity.log(self.actor, "product_updated", {"product_id": product_id})
        return serialize_mongo_doc(result)

    async def delete_product(self, product_id: str) -> dict:
        result = await self.products.delete_one({"_id": self._object_id(product_id)})
        if result.deleted_count == 0:
            raise NotFoundError("Product not found")
        await self.activity.log(self.actor, "product_deleted", {"product_id": product_id})
        return {"message": "Product deleted successfully"}
