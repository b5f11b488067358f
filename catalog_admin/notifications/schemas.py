from pydantic import BaseModel, Field
from typing import Optional


class CreateBroadcastRequest(BaseModel):
    """A message pushed to the companion app (notification or what's-new entry)."""
    name: str = Field(..., min_length=1, max_length=150)
    description: str = Field(..., min_length=1, max_length=5000)
    image: Optional[str] = None
    link: Optional[str] = None


class UpdateBroadcastRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    description: Optional[str] = Field(None, min_length=1, max_length=5000)
    image: Optional[str] = None
    link: Optional[str] = None
