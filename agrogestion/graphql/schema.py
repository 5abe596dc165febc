"""
GraphQL Resolvers
Queries y mutations de AgroGestión. Los resolvers solo traducen argumentos a
esquemas de entrada y delegan en crud/ y services/; la autorización la aplica
AccessGateExtension.
"""
import dataclasses
import logging
from decimal import Decimal
from typing import List, Optional

import strawberry
from strawberry.types import Info

from agrogestion.core.exceptions import AgroGestionError, NotFound, ValidationError
from agrogestion.crud import client as client_crud
from agrogestion.crud import product as product_crud
from agrogestion.crud import sale as sale_crud
from agrogestion.crud import user as user_crud
from agrogestion.graphql.context import AccessGateExtension, OperationLoggingExtension
from agrogestion.graphql.types import (
    AddressInput,
    AuthPayload,
    BusinessInfoInput,
    ClientType,
    LocationInput,
    ProductType,
    SaleProductInput,
    SaleType,
    UserType,
)
from agrogestion.models.client import ClientStatus, ClientType as ClientKind, DocumentType
from agrogestion.models.product import ProductCategory, StockStatus
from agrogestion.models.sale import PaymentMethod, SaleStatus
from agrogestion.schemas.client import ClientCreate, ClientUpdate
from agrogestion.schemas.common import validate_input
from agrogestion.schemas.product import ProductCreate, ProductUpdate
from agrogestion.schemas.sale import SaleCreate, SaleUpdate
from agrogestion.schemas.user import UserCreate, UserUpdate
from agrogestion.services import auth_service
from agrogestion.services.sale_service import SaleService

logger = logging.getLogger(__name__)


def _pk(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _require_pk(value, entity: str) -> int:
    pk = _pk(value)
    if pk is None:
        raise NotFound(entity, value)
    return pk


def _decimal(value: Optional[float]) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


def _choice(enum_cls, value: Optional[str], field: str):
    """Filtro opcional de enum: valor ausente = sin filtro, valor desconocido = ValidationError."""
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(field, f"debe ser uno de: {allowed}") from exc


def _asdict(value) -> Optional[dict]:
    if value is None:
        return None
    # Campos omitidos en el input no pisan los valores por defecto del esquema
    return {k: v for k, v in dataclasses.asdict(value).items() if v is not None}


@strawberry.type
class Query:
    """GraphQL Query root."""

    @strawberry.field
    def me(self, info: Info) -> Optional[UserType]:
        user = user_crud.get_user(info.context.db, info.context.identity.id)
        return UserType.from_model(user) if user else None

    @strawberry.field
    def users(self, info: Info) -> List[UserType]:
        return [UserType.from_model(u) for u in user_crud.list_users(info.context.db)]

    @strawberry.field
    def products(
        self,
        info: Info,
        category: Optional[str] = None,
        active: Optional[bool] = None,
        stock_status: Optional[str] = None,
    ) -> List[ProductType]:
        products = product_crud.list_products(
            info.context.db,
            category=_choice(ProductCategory, category, "category"),
            active=active,
            stock_status=_choice(StockStatus, stock_status, "stockStatus"),
        )
        return [ProductType.from_model(p) for p in products]

    @strawberry.field
    def product(self, info: Info, id: strawberry.ID) -> Optional[ProductType]:
        pk = _pk(id)
        product = product_crud.get_product(info.context.db, pk) if pk is not None else None
        return ProductType.from_model(product) if product else None

    @strawberry.field
    def clients(
        self,
        info: Info,
        type: Optional[str] = None,
        document_type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[ClientType]:
        clients = client_crud.list_clients(
            info.context.db,
            status=_choice(ClientStatus, status, "status"),
            type=_choice(ClientKind, type, "type"),
            document_type=_choice(DocumentType, document_type, "documentType"),
        )
        return [ClientType.from_model(c) for c in clients]

    @strawberry.field
    def client(self, info: Info, id: strawberry.ID) -> Optional[ClientType]:
        pk = _pk(id)
        client = client_crud.get_client(info.context.db, pk) if pk is not None else None
        return ClientType.from_model(client) if client else None

    @strawberry.field
    def sales(
        self,
        info: Info,
        client: Optional[strawberry.ID] = None,
        status: Optional[str] = None,
        payment_method: Optional[str] = None,
    ) -> List[SaleType]:
        if client is not None and _pk(client) is None:
            return []
        sales = sale_crud.list_sales(
            info.context.db,
            client_id=_pk(client),
            status=_choice(SaleStatus, status, "status"),
            payment_method=_choice(PaymentMethod, payment_method, "paymentMethod"),
        )
        return [SaleType.from_model(s) for s in sales]

    @strawberry.field
    def sale(self, info: Info, id: strawberry.ID) -> Optional[SaleType]:
        pk = _pk(id)
        sale = sale_crud.get_sale(info.context.db, pk) if pk is not None else None
        return SaleType.from_model(sale) if sale else None


@strawberry.type
class Mutation:
    """GraphQL Mutation root."""

    # ==================== SESIÓN ====================

    @strawberry.mutation
    def login(self, info: Info, email: str, password: str) -> AuthPayload:
        result = auth_service.login(info.context.db, email, password)
        return AuthPayload(token=result["token"], user=UserType.from_model(result["user"]))

    @strawberry.mutation
    def register(self, info: Info, email: str, password: str, name: str) -> Optional[UserType]:
        return UserType.from_model(auth_service.register(info.context.db, email, password, name))

    # ==================== USUARIOS ====================

    @strawberry.mutation
    def create_user(
        self, info: Info, email: str, password: str, name: str, role: Optional[str] = None
    ) -> UserType:
        data = {"email": email, "password": password, "name": name}
        if role:
            data["role"] = role
        user = user_crud.create_user(info.context.db, validate_input(UserCreate, data))
        logger.info("Usuario creado por %s: %s", info.context.identity.email, user.email)
        return UserType.from_model(user)

    @strawberry.mutation
    def update_user(
        self,
        info: Info,
        id: strawberry.ID,
        email: Optional[str] = None,
        name: Optional[str] = None,
        role: Optional[str] = None,
    ) -> UserType:
        data = validate_input(UserUpdate, {"email": email, "name": name, "role": role})
        return UserType.from_model(user_crud.update_user(info.context.db, _require_pk(id, "Usuario"), data))

    @strawberry.mutation
    def delete_user(self, info: Info, id: strawberry.ID) -> bool:
        pk = _pk(id)
        return pk is not None and user_crud.delete_user(info.context.db, pk)

    # ==================== PRODUCTOS ====================

    @strawberry.mutation
    def create_product(
        self,
        info: Info,
        name: str,
        category: str,
        sku: str,
        stock: float,
        unit: str,
        price: float,
        description: Optional[str] = None,
        currency: Optional[str] = None,
        supplier: Optional[strawberry.ID] = None,
        min_stock: Optional[float] = None,
        location: Optional[LocationInput] = None,
    ) -> ProductType:
        data = {
            "name": name,
            "category": category,
            "description": description,
            "sku": sku,
            "stock": stock,
            "unit": unit,
            "price": _decimal(price),
            "supplier": supplier,
            "location": _asdict(location),
        }
        if currency:
            data["currency"] = currency
        if min_stock is not None:
            data["min_stock"] = min_stock
        product = product_crud.create_product(info.context.db, validate_input(ProductCreate, data))
        return ProductType.from_model(product)

    @strawberry.mutation
    def update_product(
        self,
        info: Info,
        id: strawberry.ID,
        name: Optional[str] = None,
        sku: Optional[str] = None,
        category: Optional[str] = None,
        description: Optional[str] = None,
        stock: Optional[float] = None,
        unit: Optional[str] = None,
        price: Optional[float] = None,
        currency: Optional[str] = None,
        supplier: Optional[strawberry.ID] = None,
        min_stock: Optional[float] = None,
        location: Optional[LocationInput] = None,
        active: Optional[bool] = None,
    ) -> ProductType:
        data = validate_input(
            ProductUpdate,
            {
                "name": name,
                "sku": sku,
                "category": category,
                "description": description,
                "stock": stock,
                "unit": unit,
                "price": _decimal(price),
                "currency": currency,
                "supplier": supplier,
                "min_stock": min_stock,
                "location": _asdict(location),
                "active": active,
            },
        )
        product = product_crud.update_product(info.context.db, _require_pk(id, "Producto"), data)
        return ProductType.from_model(product)

    @strawberry.mutation
    def delete_product(self, info: Info, id: strawberry.ID) -> bool:
        pk = _pk(id)
        return pk is not None and product_crud.delete_product(info.context.db, pk)

    # ==================== CLIENTES ====================

    @strawberry.mutation
    def create_client(
        self,
        info: Info,
        name: str,
        type: str,
        document_type: str,
        document_number: str,
        email: str,
        phone: str,
        address: Optional[AddressInput] = None,
        business_info: Optional[BusinessInfoInput] = None,
        credit_limit: Optional[float] = None,
        payment_terms: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> ClientType:
        data = {
            "name": name,
            "type": type,
            "document_type": document_type,
            "document_number": document_number,
            "email": email,
            "phone": phone,
            "address": _asdict(address),
            "business_info": _asdict(business_info),
            "notes": notes,
        }
        if credit_limit is not None:
            data["credit_limit"] = _decimal(credit_limit)
        if payment_terms is not None:
            data["payment_terms"] = payment_terms
        client = client_crud.create_client(
            info.context.db, validate_input(ClientCreate, data), created_by_id=info.context.identity.id
        )
        return ClientType.from_model(client)

    @strawberry.mutation
    def update_client(
        self,
        info: Info,
        id: strawberry.ID,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[AddressInput] = None,
        business_info: Optional[BusinessInfoInput] = None,
        credit_limit: Optional[float] = None,
        payment_terms: Optional[int] = None,
        status: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> ClientType:
        data = validate_input(
            ClientUpdate,
            {
                "name": name,
                "email": email,
                "phone": phone,
                "address": _asdict(address),
                "business_info": _asdict(business_info),
                "credit_limit": _decimal(credit_limit),
                "payment_terms": payment_terms,
                "status": status,
                "notes": notes,
            },
        )
        client = client_crud.update_client(info.context.db, _require_pk(id, "Cliente"), data)
        return ClientType.from_model(client)

    @strawberry.mutation
    def delete_client(self, info: Info, id: strawberry.ID) -> bool:
        pk = _pk(id)
        return pk is not None and client_crud.delete_client(info.context.db, pk)

    # ==================== VENTAS ====================

    @strawberry.mutation
    def create_sale(
        self,
        info: Info,
        client: strawberry.ID,
        products: List[SaleProductInput],
        payment_method: str,
        notes: Optional[str] = None,
    ) -> SaleType:
        data = validate_input(
            SaleCreate,
            {
                "client": _require_pk(client, "Cliente"),
                "products": [
                    {
                        "product": _require_pk(p.product, "Producto"),
                        "quantity": p.quantity,
                        "unit_price": _decimal(p.unit_price),
                        "currency": p.currency,
                    }
                    for p in products
                ],
                "payment_method": payment_method,
                "notes": notes,
            },
        )
        sale = SaleService(info.context.db).create_sale(data, actor=info.context.identity)
        return SaleType.from_model(sale)

    @strawberry.mutation
    def update_sale(
        self, info: Info, id: strawberry.ID, status: Optional[str] = None, notes: Optional[str] = None
    ) -> SaleType:
        data = validate_input(SaleUpdate, {"status": status, "notes": notes})
        sale = SaleService(info.context.db).update_sale(_require_pk(id, "Venta"), data, actor=info.context.identity)
        return SaleType.from_model(sale)

    @strawberry.mutation
    def delete_sale(self, info: Info, id: strawberry.ID) -> bool:
        pk = _pk(id)
        return pk is not None and SaleService(info.context.db).delete_sale(pk, actor=info.context.identity)


class AgroGestionSchema(strawberry.Schema):
    def process_errors(self, errors, execution_context=None) -> None:
        for error in errors:
            original = getattr(error, "original_error", None)
            if isinstance(original, AgroGestionError):
                logger.warning("GraphQL %s en %s: %s", original.code, error.path, original.message)
            else:
                logger.error("GraphQL Error: %s", error.message, exc_info=original)


schema = AgroGestionSchema(
    query=Query,
    mutation=Mutation,
    extensions=[AccessGateExtension, OperationLoggingExtension],
)
