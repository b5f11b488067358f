from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional
from enum import Enum


class InquiryStatusEnum(str, Enum):
    NEW = "new"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class SubmitInquiryRequest(BaseModel):
    """Public inquiry form posted by the website / mobile app."""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=5, max_length=20)
    product_ids: List[str] = Field(..., min_length=1)
    message: str = Field(..., min_length=1, max_length=5000)


class UpdateInquiryRequest(BaseModel):
    status: Optional[InquiryStatusEnum] = None
    notes: Optional[str] = Field(None, max_length=5000)
