from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from catalog_admin.config import get_database
from catalog_admin.utils import success_response
from .service import DashboardService

dashboard_router = APIRouter()


@dashboard_router.get("/stats")
async def stats(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    role = getattr(request.state, "user_role", None)
    return success_response(data=await DashboardService(db).stats(role))
