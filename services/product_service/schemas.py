from typing import Optional

from pydantic import BaseModel, Field


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: int = Field(..., ge=0)
    image: Optional[str] = Field(default=None, max_length=500)
    category: Optional[str] = Field(default=None, max_length=50)
    description: Optional[str] = None


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    """Full replacement: every field is written, omitted optionals become null."""


class ProductResponse(BaseModel):
    id: int
    name: str
    price: int
    image: Optional[str]
    category: Optional[str]
    description: Optional[str]

    class Config:
        from_attributes = True


class CategoryResponse(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True
