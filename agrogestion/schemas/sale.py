from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from agrogestion.models.product import Currency
from agrogestion.models.sale import PaymentMethod, SaleStatus


class SaleItemIn(BaseModel):
    product: int
    quantity: float = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0)
    currency: Optional[Currency] = None


class SaleCreate(BaseModel):
    client: int
    products: List[SaleItemIn] = Field(..., min_length=1)
    payment_method: PaymentMethod
    notes: Optional[str] = None


class SaleUpdate(BaseModel):
    status: Optional[SaleStatus] = None
    notes: Optional[str] = None
