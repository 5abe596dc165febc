from agrogestion.db.base import Base

# Importa modelos para que se registren en Base.metadata
from .user import User, UserRole
from .client import Client, ClientType, DocumentType, ClientStatus
from .product import Product, ProductCategory, ProductUnit, Currency, BASE_CURRENCY, StockStatus
from .sale import Sale, SaleItem, PaymentMethod, SaleStatus

__all__ = [
    "User",
    "UserRole",
    "Client",
    "ClientType",
    "DocumentType",
    "ClientStatus",
    "Product",
    "ProductCategory",
    "ProductUnit",
    "Currency",
    "BASE_CURRENCY",
    "StockStatus",
    "Sale",
    "SaleItem",
    "PaymentMethod",
    "SaleStatus",
    "Base",
]
