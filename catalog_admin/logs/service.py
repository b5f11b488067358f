"""
Activity log service — record and page through dashboard actions.

Collection: logs

Usage from other services:
    await LogService(db).log(
        uid="staff@example.com",
        action="product_updated",
        details={"product_id": "..."},
    )
"""

from datetime import datetime, timezone
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from catalog_admin.utils import Logger, serialize_mongo_doc

logger = Logger("activity")


class LogService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.logs = db["logs"]

    async def log(
        self,
        uid: str | None,
        action: str,
        details: dict[str, Any] | None = None,
    ) -> str:
        """
        Record one entry and return its id.

        Args:
            uid: Who did it (the acting staff email)
            action: What happened, e.g. "category_created"
            details: Identifiers of the affected documents
        """
        entry = {
            "uid": uid,
            "action": action,
            "details": details or {},
            "timestamp": datetime.now(timezone.utc),
        }
        result = await self.logs.insert_one(entry)
        logger.info(f"{uid} {action} {entry['details']}")
        return str(result.inserted_id)

    async def list_logs(
        self,
        action: Optional[str] = None,
        uid: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[dict], int]:
        """Newest first."""
        filters: dict = {}
        if action:
            filters["action"] = action
        if uid:
            filters["uid"] = uid

        total = await self.logs.count_documents(filters)
        cursor = self.logs.find(filters).sort("timestamp", -1).skip(offset).limit(limit)
        entries = [serialize_mongo_doc(doc) async for doc in cursor]
        return entries, total

    async def recent(self, count: int = 5) -> list[dict]:
        entries, _ = await self.list_logs(limit=count)
        return entries
