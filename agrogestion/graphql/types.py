"""
GraphQL Schemas and Types
Tipos de salida e input del API GraphQL. Los nombres de campo se exponen en
camelCase (conversión automática de strawberry).
"""
from datetime import datetime
from typing import List, Optional

import strawberry

from agrogestion.models.client import Client
from agrogestion.models.product import Product
from agrogestion.models.sale import Sale, SaleItem
from agrogestion.models.user import User


def _iso(value: Optional[datetime]) -> str:
    return value.isoformat() if value else ""


# ================================================================================
# OUTPUT
# ================================================================================

@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    email: str
    name: str
    role: str
    created_at: str

    @classmethod
    def from_model(cls, user: User) -> "UserType":
        return cls(
            id=strawberry.ID(str(user.id)),
            email=user.email,
            name=user.name,
            role=user.role.value,
            created_at=_iso(user.created_at),
        )


@strawberry.type
class Price:
    current: float
    currency: str
    last_update: str


@strawberry.type
class Location:
    warehouse: Optional[str] = None
    shelf: Optional[str] = None


@strawberry.type(name="Product")
class ProductType:
    id: strawberry.ID
    name: str
    category: str
    description: Optional[str]
    sku: str
    stock: float
    unit: str
    price: Price
    supplier: Optional[strawberry.ID]
    min_stock: float
    location: Optional[Location]
    active: bool
    created_at: str
    updated_at: str

    @classmethod
    def from_model(cls, product: Product) -> "ProductType":
        location = product.location or None
        return cls(
            id=strawberry.ID(str(product.id)),
            name=product.name,
            category=product.category.value,
            description=product.description,
            sku=product.sku,
            stock=product.stock,
            unit=product.unit.value,
            price=Price(
                current=float(product.price_current),
                currency=product.price_currency.value,
                last_update=_iso(product.price_last_update),
            ),
            supplier=strawberry.ID(product.supplier) if product.supplier else None,
            min_stock=product.min_stock,
            location=Location(**location) if location else None,
            active=product.active,
            created_at=_iso(product.created_at),
            updated_at=_iso(product.updated_at),
        )


@strawberry.type
class Address:
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


@strawberry.type
class BusinessInfo:
    business_name: Optional[str] = None
    tax_category: Optional[str] = None
    tax_status: Optional[str] = None


@strawberry.type(name="Client")
class ClientType:
    id: strawberry.ID
    name: str
    type: str
    document_type: str
    document_number: str
    email: str
    phone: str
    address: Optional[Address]
    business_info: Optional[BusinessInfo]
    credit_limit: float
    payment_terms: int
    status: str
    notes: Optional[str]
    created_at: str
    updated_at: str

    @classmethod
    def from_model(cls, client: Client) -> "ClientType":
        return cls(
            id=strawberry.ID(str(client.id)),
            name=client.name,
            type=client.type.value,
            document_type=client.document_type.value,
            document_number=client.document_number,
            email=client.email,
            phone=client.phone,
            address=Address(**client.address) if client.address else None,
            business_info=BusinessInfo(**client.business_info) if client.business_info else None,
            credit_limit=float(client.credit_limit),
            payment_terms=client.payment_terms,
            status=client.status.value,
            notes=client.notes,
            created_at=_iso(client.created_at),
            updated_at=_iso(client.updated_at),
        )


@strawberry.type
class SaleProduct:
    product: ProductType
    quantity: float
    unit_price: float
    currency: str

    @classmethod
    def from_model(cls, item: SaleItem) -> "SaleProduct":
        return cls(
            product=ProductType.from_model(item.product),
            quantity=item.quantity,
            unit_price=float(item.unit_price),
            currency=item.currency.value,
        )


@strawberry.type(name="Sale")
class SaleType:
    id: strawberry.ID
    client: ClientType
    products: List[SaleProduct]
    total_amount: float
    payment_method: str
    status: str
    notes: Optional[str]
    created_by: UserType
    created_at: str
    updated_at: str

    @classmethod
    def from_model(cls, sale: Sale) -> "SaleType":
        return cls(
            id=strawberry.ID(str(sale.id)),
            client=ClientType.from_model(sale.client),
            products=[SaleProduct.from_model(item) for item in sale.items],
            total_amount=float(sale.total_amount),
            payment_method=sale.payment_method.value,
            status=sale.status.value,
            notes=sale.notes,
            created_by=UserType.from_model(sale.created_by),
            created_at=_iso(sale.created_at),
            updated_at=_iso(sale.updated_at),
        )


@strawberry.type
class AuthPayload:
    token: str
    user: UserType


# ================================================================================
# INPUT
# ================================================================================

@strawberry.input
class LocationInput:
    warehouse: Optional[str] = None
    shelf: Optional[str] = None


@strawberry.input
class AddressInput:
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


@strawberry.input
class BusinessInfoInput:
    business_name: Optional[str] = None
    tax_category: Optional[str] = None
    tax_status: Optional[str] = None


@strawberry.input
class SaleProductInput:
    product: strawberry.ID
    quantity: float
    unit_price: float
    currency: Optional[str] = None
