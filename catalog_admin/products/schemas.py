"""
Product schemas — cutting tools and abrasives shown in the companion app.

Image fields hold URLs of files already in object storage.
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class ApplicationUse(BaseModel):
    uses: str
    icon: str = ""


class ProductBase(BaseModel):
    category_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    subtitle: str = ""
    overview: str = ""
    material_number: str = ""
    iso: str = ""
    shank_size: str = ""
    cutting_condition: List[str] = []
    abrasive: str = ""
    machine_hp: Optional[str] = None
    cutting_material: Optional[str] = None
    application: List[ApplicationUse] = []
    images: List[str] = []
    product_img: str = ""
    overview_img: str = ""
    overview_points: List[dict[str, str]] = []
    related_parts: List[str] = []
    featured: bool = False
    product_price: float = Field(0, ge=0)


class CreateProductRequest(ProductBase):
    pass


class UpdateProductRequest(BaseModel):
    category_id: Optional[str] = Field(None, min_length=1)
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    subtitle: Optional[str] = None
    overview: Optional[str] = None
    material_number: Optional[str] = None
    iso: Optional[str] = None
    shank_size: Optional[str] = None
    cutting_condition: Optional[List[str]] = None
    abrasive: Optional[str] = None
    machine_hp: Optional[str] = None
    cutting_material: Optional[str] = None
    application: Optional[List[ApplicationUse]] = None
    images: Optional[List[str]] = None
    product_img: Optional[str] = None
    overview_img: Optional[str] = None
    overview_points: Optional[List[dict[str, str]]] = None
    related_parts: Optional[List[str]] = None
    featured: Optional[bool] = None
    product_price: Optional[float] = Field(None, ge=0)
