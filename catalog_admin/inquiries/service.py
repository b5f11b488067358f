"""Inquiry service — customer inquiries about catalog products."""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId

from catalog_admin.logs.service import LogService
from catalog_admin.utils import Logger, serialize_mongo_doc
from catalog_admin.utils.exceptions import NotFoundError
from .schemas import InquiryStatusEnum

logger = Logger("inquiries")


class InquiryService:
    def __init__(self, db: AsyncIOMotorDatabase, actor: str | None = None):
        self.db = db
        self.actor = actor
        self.inquiries = db["inquiries"]
        self.activity = LogService(db)

    def _object_id(self, inquiry_id: str) -> ObjectId:
        if not ObjectId.is_valid(inquiry_id):
            raise NotFoundError("Inquiry not found")
        return ObjectId(inquiry_id)

    async def submit(self, data: dict) -> str:
        """Store a public submission. Returns the new inquiry id."""
        doc = {
            **data,
            "status": InquiryStatusEnum.NEW.value,
            "created_at": datetime.now(timezone.utc),
        }
        result = await self.inquiries.insert_one(doc)
        logger.info(f"Inquiry {result.inserted_id} from {data['email']}")
        return str(result.inserted_id)

    async def list_inquiries(
        self,
        status: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[dict], int]:
        filters: dict = {}
        if status:
            filters["status"] = status
        total = await self.inquiries.count_documents(filters)
        cursor = self.inquiries.find(filters).sort("created_at", -1).skip(offset).limit(limit)
        return [serialize_mongo_doc(i) async for i in cursor], total

    async def get_inquiry(self, inquiry_id: str) -> dict:
        inquiry = await self.inquiries.find_one({"_id": self._object_id(inquiry_id)})
        if not inquiry:
            raise NotFoundError("Inquiry not found")
        return serialize_mongo_doc(inquiry)

    async def update_inquiry(self, inquiry_id: str, update_data: dict) -> dict:
        clean = {k: getattr(v, "value", v) for k, v in update_data.items() if v is not None}
        clean["updated_at"] = datetime.now(timezone.utc)

        result = await self.inquiries.find_one_and_update(
            {"_id": self._object_id(inquiry_id)},
            {"$set": clean},
            return_document=True,
        )
        if not result:
            raise NotFoundError("Inquiry not found")
        await self.activity.log(
            self.actor, "inquiry_updated", {"inquiry_id": inquiry_id, "status": result.get("status")}
        )
        return serialize_mongo_doc(result)
