from fastapi import APIRouter, Depends, Request, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional

from catalog_admin.config import get_database
from catalog_admin.rbac import Action, Resource
from catalog_admin.rbac.decorators import require_permission
from catalog_admin.users import get_actor
from catalog_admin.utils import paginated, success_response
from .schemas import CreateProductRequest, UpdateProductRequest
from .service import ProductService

products_router = APIRouter()


@products_router.post("/")
@require_permission(Action.CREATE, Resource.PRODUCTS)
async def create_product(
    request: Request,
    body: CreateProductRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProductService(db, get_actor(request))
    product = await svc.create_product(body.model_dump())
    return success_response(data=product, message="Product created", code=201)


@products_router.get("/")
@require_permission(Action.READ, Resource.PRODUCTS)
async def list_products(
    request: Request,
    category_id: Optional[str] = Query(None),
    q: Optional[str] = Query(None, description="Search title or material number"),
    featured: Optional[bool] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProductService(db)
    products, total = await svc.list_products(
        category_id=category_id, query=q, featured=featured, limit=limit, offset=offset
    )
    return success_response(
        data=paginated("products", products, total, limit, offset)
    )


@products_router.get("/{product_id}")
@require_permission(Action.READ, Resource.PRODUCTS)
async def get_product(
    request: Request,
    product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    product = await ProductService(db).get_product(product_id)
    return success_response(data=product)


@products_router.put("/{product_id}")
@require_permission(Action.UPDATE, Resource.PRODUCTS)
async def update_product(
    request: Request,
    product_id: str,
    body: UpdateProductRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProductService(db, get_actor(request))
    product = await svc.update_product(product_id, body.model_dump(exclude_unset=True))
    return success_response(data=product, message="Product updated")


@products_router.delete("/{product_id}")
@require_permission(Action.DELETE, Resource.PRODUCTS)
async def delete_product(
    request: Request,
    product_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = ProductService(db, get_actor(request))
    result = await svc.delete_product(product_id)
    return success_response(data=result, message="Product deleted")
