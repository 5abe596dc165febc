"""
Access Gate: resolución de identidad y política de autorización.

La identidad se resuelve una vez por request a partir del header
`Authorization: Bearer <token>`. Un token ausente o inválido produce una
identidad anónima (None), nunca un error: cada operación decide qué exige
según la tabla OPERATION_POLICIES.
"""
import enum
from dataclasses import dataclass
from typing import Dict, Optional

from fastapi import Header
from sqlalchemy.orm import Session

from agrogestion.core.config import Roles
from agrogestion.core.exceptions import Unauthenticated, Unauthorized
from agrogestion.core.security import decode_token
from agrogestion.crud.user import get_user

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Identity:
    id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Roles.ADMIN

    def claims(self) -> dict:
        return {"id": self.id, "email": self.email, "role": self.role}


def resolve_identity(authorization: Optional[str]) -> Optional[Identity]:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        return None

    payload = decode_token(token)
    if not payload:
        return None

    try:
        return Identity(id=int(payload["id"]), email=str(payload["email"]), role=str(payload["role"]))
    except (KeyError, TypeError, ValueError):
        return None


def get_identity(authorization: Optional[str] = Header(None)) -> Optional[Identity]:
    """Dependency de FastAPI: identidad del llamador o None."""
    return resolve_identity(authorization)


def load_identity(db: Session, identity: Optional[Identity]) -> Optional[Identity]:
    """
    Contrasta la identidad del token con la base: un usuario eliminado deja de
    estar autenticado y el rol vigente es el guardado, no el del token.
    """
    if identity is None:
        return None
    user = get_user(db, identity.id)
    if user is None:
        return None
    return Identity(id=user.id, email=user.email, role=user.role.value)


class Requirement(enum.Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


# Operación (campo raíz GraphQL) -> requisito
OPERATION_POLICIES: Dict[str, Requirement] = {
    # Lecturas públicas
    "products": Requirement.PUBLIC,
    "product": Requirement.PUBLIC,
    "clients": Requirement.PUBLIC,
    "client": Requirement.PUBLIC,
    "sales": Requirement.PUBLIC,
    "sale": Requirement.PUBLIC,
    # Sesión
    "login": Requirement.PUBLIC,
    "register": Requirement.PUBLIC,
    "me": Requirement.AUTHENTICATED,
    # Usuarios
    "users": Requirement.ADMIN,
    "createUser": Requirement.ADMIN,
    "updateUser": Requirement.ADMIN,
    "deleteUser": Requirement.ADMIN,
    # Inventario, clientes y ventas
    "createProduct": Requirement.AUTHENTICATED,
    "updateProduct": Requirement.AUTHENTICATED,
    "deleteProduct": Requirement.AUTHENTICATED,
    "createClient": Requirement.AUTHENTICATED,
    "updateClient": Requirement.AUTHENTICATED,
    "deleteClient": Requirement.AUTHENTICATED,
    "createSale": Requirement.AUTHENTICATED,
    "updateSale": Requirement.AUTHENTICATED,
    "deleteSale": Requirement.AUTHENTICATED,
}

DEFAULT_REQUIREMENT = Requirement.AUTHENTICATED


def requirement_for(operation: str) -> Requirement:
    return OPERATION_POLICIES.get(operation, DEFAULT_REQUIREMENT)


def authorize(operation: str, identity: Optional[Identity]) -> Optional[Identity]:
    """
    Aplica la política de `operation` sobre la identidad del llamador.

    Raises:
        Unauthenticated: la operación exige sesión y no hay identidad.
        Unauthorized: la operación exige rol admin y el llamador no lo tiene.
    """
    requirement = requirement_for(operation)
    if requirement is Requirement.PUBLIC:
        return identity
    if identity is None:
        raise Unauthenticated()
    if requirement is Requirement.ADMIN and not identity.is_admin:
        raise Unauthorized(Roles.ADMIN)
    return identity
