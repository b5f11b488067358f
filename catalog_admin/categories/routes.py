from fastapi import APIRouter, Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from catalog_admin.config import get_database
from catalog_admin.rbac import Action, Resource
from catalog_admin.rbac.decorators import require_permission
from catalog_admin.users import get_actor
from catalog_admin.utils import success_response
from .schemas import CreateCategoryRequest, UpdateCategoryRequest
from .service import CategoryService

categories_router = APIRouter()


@categories_router.post("/")
@require_permission(Action.CREATE, Resource.CATEGORIES)
async def create_category(
    request: Request,
    body: CreateCategoryRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = CategoryService(db, get_actor(request))
    category = await svc.create_category(body.model_dump())
    return success_response(data=category, message="Category created", code=201)


@categories_router.get("/")
@require_permission(Action.READ, Resource.CATEGORIES)
async def list_categories(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    categories = await CategoryService(db).list_categories()
    return success_response(data={"categories": categories, "total": len(categories)})


@categories_router.get("/{category_id}")
@require_permission(Action.READ, Resource.CATEGORIES)
async def get_category(
    request: Request,
    category_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    category = await CategoryService(db).get_category(category_id)
    return success_response(data=category)


@categories_router.put("/{category_id}")
@require_permission(Action.UPDATE, Resource.CATEGORIES)
async def update_category(
    request: Request,
    category_id: str,
    body: UpdateCategoryRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = CategoryService(db, get_actor(request))
    category = await svc.update_category(category_id, body.model_dump(exclude_unset=True))
    return success_response(data=category, message="Category updated")


@categories_router.delete("/{category_id}")
@require_permission(Action.DELETE, Resource.CATEGORIES)
async def delete_category(
    request: Request,
    category_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = CategoryService(db, get_actor(request))
    result = await svc.delete_category(category_id)
    return success_response(data=result, message="Category deleted")
