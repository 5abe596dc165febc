# agrogestion/crud/user.py
from typing import List, Optional

from sqlalchemy.orm import Session

from agrogestion.core.exceptions import DuplicateKey, NotFound, ValidationError
from agrogestion.core.security import hash_password
from agrogestion.crud.base import commit_unique, non_null
from agrogestion.models.client import Client
from agrogestion.models.mixins import utcnow
from agrogestion.models.sale import Sale
from agrogestion.models.user import User
from agrogestion.schemas.user import UserCreate, UserUpdate


# -----------------------------------------------------
# Obtener usuario por ID
# -----------------------------------------------------
def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


# -----------------------------------------------------
# Obtener usuario por email
# -----------------------------------------------------
def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


# -----------------------------------------------------
# Crear usuario (la contraseña se guarda solo como hash)
# -----------------------------------------------------
def create_user(db: Session, data: UserCreate) -> User:
    if get_user_by_email(db, data.email):
        raise DuplicateKey("email", data.email)

    obj = User(
        email=data.email,
        name=data.name,
        role=data.role,
        password_hash=hash_password(data.password),
    )
    db.add(obj)
    commit_unique(db, "email", data.email)
    db.refresh(obj)
    return obj


def update_user(db: Session, user_id: int, data: UserUpdate) -> User:
    user = get_user(db, user_id)
    if not user:
        raise NotFound("Usuario", user_id)

    update_data = non_null(data.model_dump(exclude_unset=True))
    if "email" in update_data and update_data["email"] != user.email:
        if get_user_by_email(db, update_data["email"]):
            raise DuplicateKey("email", update_data["email"])

    for field, value in update_data.items():
        setattr(user, field, value)
    user.updated_at = utcnow()

    commit_unique(db, "email", update_data.get("email"))
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int) -> bool:
    user = get_user(db, user_id)
    if not user:
        return False
    if (
        db.query(Client.id).filter(Client.created_by_id == user_id).first()
        or db.query(Sale.id).filter(Sale.created_by_id == user_id).first()
    ):
        raise ValidationError("id", "el usuario tiene registros asociados")
    db.delete(user)
    db.commit()
    return True
