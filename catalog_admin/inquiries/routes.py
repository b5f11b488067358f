from fastapi import APIRouter, Depends, Request, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional

from catalog_admin.config import get_database
from catalog_admin.rbac import Action, Resource
from catalog_admin.rbac.decorators import require_permission
from catalog_admin.users import get_actor
from catalog_admin.utils import paginated, success_response
from .schemas import InquiryStatusEnum, SubmitInquiryRequest, UpdateInquiryRequest
from .service import InquiryService

inquiries_router = APIRouter()
public_inquiries_router = APIRouter()


@public_inquiries_router.post("/inquiries")
async def submit_inquiry(
    body: SubmitInquiryRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Unauthenticated submission endpoint used by the public site and app."""
    inquiry_id = await InquiryService(db).submit(body.model_dump())
    return success_response(
        data={"id": inquiry_id}, message="Inquiry submitted successfully", code=201
    )


@inquiries_router.get("/")
@require_permission(Action.READ, Resource.INQUIRIES)
async def list_inquiries(
    request: Request,
    status: Optional[InquiryStatusEnum] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    inquiries, total = await InquiryService(db).list_inquiries(
        status=status.value if status else None, limit=limit, offset=offset
    )
    return success_response(
        data=paginated("inquiries", inquiries, total, limit, offset)
    )


@inquiries_router.get("/{inquiry_id}")
@require_permission(Action.READ, Resource.INQUIRIES)
async def get_inquiry(
    request: Request,
    inquiry_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return success_response(data=await InquiryService(db).get_inquiry(inquiry_id))


@inquiries_router.put("/{inquiry_id}")
@require_permission(Action.UPDATE, Resource.INQUIRIES)
async def update_inquiry(
    request: Request,
    inquiry_id: str,
    body: UpdateInquiryRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = InquiryService(db, get_actor(request))
    inquiry = await svc.update_inquiry(inquiry_id, body.model_dump(exclude_unset=True))
    return success_response(data=inquiry, message="Inquiry updated")
