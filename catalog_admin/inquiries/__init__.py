from .routes import inquiries_router, public_inquiries_router
from .service import InquiryService

__all__ = ["inquiries_router", "public_inquiries_router", "InquiryService"]
