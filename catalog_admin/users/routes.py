from fastapi import APIRouter, Depends, Request, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional

from catalog_admin.config import get_database
from catalog_admin.rbac import Action, Resource
from catalog_admin.rbac.decorators import require_permission
from catalog_admin.utils import paginated, success_response
from .schemas import CreateUserRequest, UpdateUserRequest
from .service import UserService

users_router = APIRouter()


def get_actor(request: Request) -> str | None:
    """Email of the staff member making the request (set by the middleware)."""
    user = getattr(request.state, "user", None) or {}
    return user.get("email")


@users_router.post("/")
@require_permission(Action.CREATE, Resource.USERS)
async def create_user(
    request: Request,
    body: CreateUserRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = UserService(db, get_actor(request))
    user = await svc.create_user(body.model_dump(mode="json"))
    return success_response(data=user, message="User created", code=201)


@users_router.get("/")
@require_permission(Action.READ, Resource.USERS)
async def list_users(
    request: Request,
    q: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = UserService(db)
    users, total = await svc.list_users(query=q, limit=limit, offset=offset)
    return success_response(
        data=paginated("users", users, total, limit, offset)
    )


@users_router.get("/{user_id}")
@require_permission(Action.READ, Resource.USERS)
async def get_user(
    request: Request,
    user_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = UserService(db)
    user = await svc.get_user(user_id)
    return success_response(data=user)


@users_router.put("/{user_id}")
@require_permission(Action.UPDATE, Resource.USERS)
async def update_user(
    request: Request,
    user_id: str,
    body: UpdateUserRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = UserService(db, get_actor(request))
    user = await svc.update_user(user_id, body.model_dump(mode="json", exclude_unset=True))
    return success_response(data=user, message="User updated")


@users_router.delete("/{user_id}")
@require_permission(Action.DELETE, Resource.USERS)
async def delete_user(
    request: Request,
    user_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = UserService(db, get_actor(request))
    result = await svc.delete_user(user_id)
    return success_response(data=result, message="User deleted")
