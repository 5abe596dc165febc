"""
Modelo de Usuario para autenticación.
"""
import enum

from sqlalchemy import Column, Integer, String, Enum

from agrogestion.db.base import Base
from agrogestion.models.mixins import TimestampMixin


class UserRole(str, enum.Enum):
    admin = "admin"
    user = "user"


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    role = Column(Enum(UserRole, name="userrole"), default=UserRole.user, nullable=False)

    def __repr__(self):
        return f"<User {self.email} ({self.role.value if self.role else None})>"
