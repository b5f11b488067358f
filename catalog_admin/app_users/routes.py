from fastapi import APIRouter, Depends, Request, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional

from catalog_admin.config import get_database
from catalog_admin.rbac import Action, Resource
from catalog_admin.rbac.decorators import require_permission
from catalog_admin.users import get_actor
from catalog_admin.utils import paginated, success_response
from .schemas import AuthenticationUpdateRequest
from .service import AppUserService

app_users_router = APIRouter()


@app_users_router.get("/")
@require_permission(Action.READ, Resource.APP_USERS)
async def list_app_users(
    request: Request,
    authenticated: Optional[bool] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    users, total = await AppUserService(db).list_app_users(
        authenticated=authenticated, limit=limit, offset=offset
    )
    return success_response(
        data=paginated("app_users", users, total, limit, offset)
    )


@app_users_router.get("/{app_user_id}")
@require_permission(Action.READ, Resource.APP_USERS)
async def get_app_user(
    request: Request,
    app_user_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return success_response(data=await AppUserService(db).get_app_user(app_user_id))


@app_users_router.put("/{app_user_id}/authentication")
@require_permission(Action.UPDATE, Resource.APP_USERS)
async def update_authentication(
    request: Request,
    app_user_id: str,
    body: AuthenticationUpdateRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = AppUserService(db, get_actor(request))
    user = await svc.set_authentication(app_user_id, body.is_authenticated)
    return success_response(data=user, message="App user updated")
