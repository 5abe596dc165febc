# agrogestion/schemas/client.py
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from agrogestion.models.client import ClientType, DocumentType, ClientStatus


class AddressIn(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = "Argentina"


class BusinessInfoIn(BaseModel):
    business_name: Optional[str] = None
    tax_category: Optional[str] = None
    tax_status: Optional[str] = None


def _required_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("no puede estar vacío")
    return value


class ClientCreate(BaseModel):
    name: str
    type: ClientType
    document_type: DocumentType
    document_number: str
    email: EmailStr
    phone: str
    address: Optional[AddressIn] = None
    business_info: Optional[BusinessInfoIn] = None
    credit_limit: Decimal = Field(Decimal("0"), ge=0)
    payment_terms: int = Field(30, ge=0)
    notes: Optional[str] = None

    @field_validator("name", "document_number", "phone")
    @classmethod
    def not_blank(cls, v):
        return _required_text(v)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()


class ClientUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[AddressIn] = None
    business_info: Optional[BusinessInfoIn] = None
    credit_limit: Optional[Decimal] = Field(None, ge=0)
    payment_terms: Optional[int] = Field(None, ge=0)
    status: Optional[ClientStatus] = None
    notes: Optional[str] = None

    @field_validator("name", "phone")
    @classmethod
    def not_blank(cls, v):
        return _required_text(v)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower() if v else v
