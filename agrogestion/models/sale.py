"""
Modelos Sale y SaleItem.

Las líneas de venta pertenecen a la venta y guardan una copia (snapshot) de
cantidad, precio unitario y moneda al momento de la venta.
"""
import enum

from sqlalchemy import Column, Integer, Float, Numeric, Text, Enum, ForeignKey
from sqlalchemy.orm import relationship

from agrogestion.db.base import Base
from agrogestion.models.mixins import TimestampMixin
from agrogestion.models.product import Currency, BASE_CURRENCY


class PaymentMethod(str, enum.Enum):
    cash = "cash"
    transfer = "transfer"
    credit = "credit"


class SaleStatus(str, enum.Enum):
    pending = "pending"
    completed = "completed"
    cancelled = "cancelled"


class Sale(TimestampMixin, Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)

    total_amount = Column(Numeric(18, 4, asdecimal=True), nullable=False)
    payment_method = Column(Enum(PaymentMethod, name="paymentmethod"), nullable=False)
    status = Column(Enum(SaleStatus, name="salestatus"), nullable=False, default=SaleStatus.pending)
    notes = Column(Text, nullable=True)

    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    # Relaciones
    client = relationship("Client", back_populates="sales", lazy="joined")
    created_by = relationship("User", lazy="joined")
    items = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="SaleItem.position",
        lazy="selectin",
    )


class SaleItem(Base):
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)

    quantity = Column(Float, nullable=False)
    unit_price = Column(Numeric(18, 4, asdecimal=True), nullable=False)
    currency = Column(Enum(Currency, name="currency"), nullable=False, default=BASE_CURRENCY)

    sale = relationship("Sale", back_populates="items")
    product = relationship("Product", lazy="joined")
