from pydantic import BaseModel, Field
from typing import Optional


class CreateCategoryRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=2000)
    image_url: str = ""


class UpdateCategoryRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    image_url: Optional[str] = None
