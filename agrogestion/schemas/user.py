# agrogestion/schemas/user.py
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from agrogestion.models.user import UserRole


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1)
    role: UserRole = UserRole.user

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()


class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    name: Optional[str] = Field(None, min_length=1)
    role: Optional[UserRole] = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower() if v else v
