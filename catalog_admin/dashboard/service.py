"""Dashboard overview — counts of what the caller may see."""

import asyncio

from motor.motor_asyncio import AsyncIOMotorDatabase

from catalog_admin.logs.service import LogService
from catalog_admin.rbac import Action, Resource, Role, has_permission

# Resource → backing collection.
COLLECTIONS: dict[Resource, str] = {
    Resource.PRODUCTS: "products",
    Resource.CATEGORIES: "categories",
    Resource.USERS: "users",
    Resource.NOTIFICATIONS: "notifications",
    Resource.WHATS_NEW: "whats_new",
    Resource.INQUIRIES: "inquiries",
    Resource.APP_USERS: "app_users",
}


class DashboardService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    async def stats(self, role: Role | str | None, recent_logs: int = 5) -> dict:
        """
        Count documents of every readable resource. Resources the role may
        not read are left out instead of reported as zero.
        """
        readable = [
            resource
            for resource in COLLECTIONS
            if has_permission(role, Action.READ, resource)
        ]
        totals = await asyncio.gather(
            *(self.db[COLLECTIONS[r]].count_documents({}) for r in readable)
        )
        result: dict = {
            "counts": {r.value: total for r, total in zip(readable, totals)},
        }
        if has_permission(role, Action.READ, Resource.LOGS):
            result["recent_logs"] = await LogService(self.db).recent(recent_logs)
        return result
