"""
Log routes — read-only view of the activity trail.

Endpoints:
    GET  /      List entries, newest first (filter by action or uid)
"""

from fastapi import APIRouter, Depends, Request, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional

from catalog_admin.config import get_database
from catalog_admin.rbac import Action, Resource
from catalog_admin.rbac.decorators import require_permission
from catalog_admin.utils import paginated, success_response
from .service import LogService

logs_router = APIRouter()


@logs_router.get("/")
@require_permission(Action.READ, Resource.LOGS)
async def list_logs(
    request: Request,
    action: Optional[str] = Query(None, description="product_created, user_updated, ..."),
    uid: Optional[str] = Query(None, description="Acting staff email"),
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = LogService(db)
    logs, total = await svc.list_logs(action=action, uid=uid, limit=limit, offset=offset)
    return success_response(
        data=paginated("logs", logs, total, limit, offset)
    )
