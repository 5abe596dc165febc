# agrogestion/models/client.py
import enum

from sqlalchemy import Column, Integer, String, Text, Numeric, Enum, ForeignKey, JSON
from sqlalchemy.orm import relationship

from agrogestion.db.base import Base
from agrogestion.models.mixins import TimestampMixin


class ClientType(str, enum.Enum):
    individual = "individual"
    company = "company"


class DocumentType(str, enum.Enum):
    dni = "dni"
    cuit = "cuit"
    cuil = "cuil"


class ClientStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    blocked = "blocked"


class Client(TimestampMixin, Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    type = Column(Enum(ClientType, name="clienttype"), nullable=False)
    document_type = Column(Enum(DocumentType, name="documenttype"), nullable=False)
    document_number = Column(String(32), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=False)

    # Subdocumentos: {street, city, state, zipCode, country} / {businessName, taxCategory, taxStatus}
    address = Column(JSON, nullable=True)
    business_info = Column(JSON, nullable=True)

    credit_limit = Column(Numeric(18, 2, asdecimal=True), default=0, nullable=False)
    payment_terms = Column(Integer, default=30, nullable=False)
    status = Column(Enum(ClientStatus, name="clientstatus"), default=ClientStatus.active, nullable=False)
    notes = Column(Text, nullable=True)

    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    created_by = relationship("User", lazy="joined")
    sales = relationship("Sale", back_populates="client", lazy="select")

    def __repr__(self):
        return f"<Client {self.name} ({self.document_number})>"
