# agrogestion/services/auth_service.py
import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from agrogestion.core.auth import Identity
from agrogestion.core.exceptions import InvalidCredentials
from agrogestion.core.security import create_access_token, verify_password
from agrogestion.crud.user import create_user, get_user_by_email
from agrogestion.models.user import User, UserRole
from agrogestion.schemas.common import validate_input
from agrogestion.schemas.user import UserCreate

logger = logging.getLogger(__name__)


def identity_for(user: User) -> Identity:
    return Identity(id=user.id, email=user.email, role=user.role.value)


def issue_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Emite el JWT firmado con los claims id, email y role."""
    return create_access_token(identity_for(user).claims(), expires_delta=expires_delta)


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def login(db: Session, email: str, password: str, expires_delta: Optional[timedelta] = None) -> dict:
    user = authenticate(db, email, password)
    if not user:
        logger.warning("Intento de login fallido para: %s", email)
        raise InvalidCredentials()

    logger.info("Usuario autenticado: %s", user.email)
    return {"token": issue_token(user, expires_delta), "user": user}


def register(db: Session, email: str, password: str, name: str) -> User:
    """
    Alta self-service: siempre con rol `user`.
    Falla con DuplicateKey si el email ya está registrado.
    """
    user = create_user(
        db, validate_input(UserCreate, {"email": email, "password": password, "name": name, "role": UserRole.user})
    )
    logger.info("Usuario registrado: %s", user.email)
    return user
