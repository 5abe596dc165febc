"""
Modelo Product - catálogo de insumos agropecuarios
"""
import enum

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Numeric, Text, Enum, JSON, CheckConstraint

from agrogestion.db.base import Base
from agrogestion.models.mixins import TimestampMixin, utcnow


class ProductCategory(str, enum.Enum):
    cereal = "cereal"
    semilla = "semilla"
    fertilizante = "fertilizante"
    insumo = "insumo"
    otro = "otro"


class ProductUnit(str, enum.Enum):
    kg = "kg"
    ton = "ton"
    unidad = "unidad"
    litro = "litro"


class Currency(str, enum.Enum):
    ARS = "ARS"
    USD = "USD"


BASE_CURRENCY = Currency.ARS


class StockStatus(str, enum.Enum):
    """Filtro de inventario: bajo stock (incluye agotados), agotado o disponible."""
    low = "low"
    out = "out"
    available = "available"


LOW_STOCK_THRESHOLD = 10


class Product(TimestampMixin, Base):
    __tablename__ = "products"
    __table_args__ = (CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),)

    id = Column(Integer, primary_key=True, index=True)

    # Información básica
    name = Column(String(200), nullable=False, index=True)
    category = Column(Enum(ProductCategory, name="productcategory"), nullable=False, index=True)
    description = Column(Text, nullable=True)
    sku = Column(String(64), nullable=False, unique=True, index=True)

    # Stock (nunca negativo)
    stock = Column(Float, nullable=False, default=0)
    unit = Column(Enum(ProductUnit, name="productunit"), nullable=False)
    min_stock = Column(Float, nullable=False, default=0)

    # Precio vigente
    price_current = Column(Numeric(18, 4, asdecimal=True), nullable=False)
    price_currency = Column(Enum(Currency, name="currency"), nullable=False, default=BASE_CURRENCY)
    price_last_update = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Referencia opaca al proveedor
    supplier = Column(String(64), nullable=True)

    # {warehouse, shelf}
    location = Column(JSON, nullable=True)

    active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<Product {self.sku} stock={self.stock}>"
