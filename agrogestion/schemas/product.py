from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from agrogestion.models.product import ProductCategory, ProductUnit, Currency, BASE_CURRENCY


class LocationIn(BaseModel):
    warehouse: Optional[str] = None
    shelf: Optional[str] = None


class ProductCreate(BaseModel):
    name: str
    category: ProductCategory
    description: Optional[str] = None
    sku: str
    stock: float = Field(..., ge=0)
    unit: ProductUnit
    price: Decimal = Field(..., ge=0)
    currency: Currency = BASE_CURRENCY
    supplier: Optional[str] = None
    min_stock: float = Field(0, ge=0)
    location: Optional[LocationIn] = None

    @field_validator("name", "sku")
    @classmethod
    def not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("no puede estar vacío")
        return v


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[ProductCategory] = None
    description: Optional[str] = None
    stock: Optional[float] = Field(None, ge=0)
    unit: Optional[ProductUnit] = None
    price: Optional[Decimal] = Field(None, ge=0)
    currency: Optional[Currency] = None
    supplier: Optional[str] = None
    min_stock: Optional[float] = Field(None, ge=0)
    location: Optional[LocationIn] = None
    active: Optional[bool] = None
