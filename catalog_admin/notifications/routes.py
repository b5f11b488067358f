from fastapi import APIRouter, Depends, Request, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from catalog_admin.config import get_database
from catalog_admin.rbac import Action, Resource
from catalog_admin.rbac.decorators import require_permission
from catalog_admin.users import get_actor
from catalog_admin.utils import paginated, success_response
from .schemas import CreateBroadcastRequest, UpdateBroadcastRequest
from .service import BroadcastService, NotificationService


def build_broadcast_router(
    service_cls: type[BroadcastService],
    resource: Resource,
) -> APIRouter:
    """CRUD router for one broadcast collection, guarded by `resource`."""
    router = APIRouter()

    @router.post("/")
    @require_permission(Action.CREATE, resource)
    async def create_item(
        request: Request,
        body: CreateBroadcastRequest,
        db: AsyncIOMotorDatabase = Depends(get_database),
    ):
        item = await service_cls(db, get_actor(request)).create(body.model_dump())
        return success_response(data=item, message="Created", code=201)

    @router.get("/")
    @require_permission(Action.READ, resource)
    async def list_items(
        request: Request,
        limit: int = Query(50, ge=1, le=200),
        offset: int = Query(0, ge=0),
        db: AsyncIOMotorDatabase = Depends(get_database),
    ):
        items, total = await service_cls(db).list_items(limit=limit, offset=offset)
        return success_response(
            data=paginated("items", items, total, limit, offset)
        )

    @router.get("/{item_id}")
    @require_permission(Action.READ, resource)
    async def get_item(
        request: Request,
        item_id: str,
        db: AsyncIOMotorDatabase = Depends(get_database),
    ):
        return success_response(data=await service_cls(db).get(item_id))

    @router.put("/{item_id}")
    @require_permission(Action.UPDATE, resource)
    async def update_item(
        request: Request,
        item_id: str,
        body: UpdateBroadcastRequest,
        db: AsyncIOMotorDatabase = Depends(get_database),
    ):
        svc = service_cls(db, get_actor(request))
        item = await svc.update(item_id, body.model_dump(exclude_unset=True))
        return success_response(data=item, message="Updated")

    @router.delete("/{item_id}")
    @require_permission(Action.DELETE, resource)
    async def delete_item(
        request: Request,
        item_id: str,
        db: AsyncIOMotorDatabase = Depends(get_database),
    ):
        result = await service_cls(db, get_actor(request)).delete(item_id)
        return success_response(data=result, message="Deleted")

    return router


notifications_router = build_broadcast_router(NotificationService, Resource.NOTIFICATIONS)
