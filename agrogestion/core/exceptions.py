"""
Excepciones de negocio de AgroGestión.

Todas heredan de AgroGestionError y llevan un `code` estable que la capa
GraphQL expone en `extensions.code` y la capa REST traduce a un status HTTP.
"""
from typing import Any, Optional


class AgroGestionError(Exception):
    """Excepción base para errores de reglas de negocio."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> dict:
        return {"code": self.code}


class Unauthenticated(AgroGestionError):
    code = "UNAUTHENTICATED"
    status_code = 401

    def __init__(self, message: str = "No autenticado"):
        super().__init__(message)


class Unauthorized(AgroGestionError):
    code = "FORBIDDEN"
    status_code = 403

    def __init__(self, role: str):
        super().__init__(f"No autorizado: se requiere rol '{role}'")
        self.role = role


class InvalidCredentials(AgroGestionError):
    code = "INVALID_CREDENTIALS"
    status_code = 401

    def __init__(self, message: str = "Credenciales inválidas"):
        super().__init__(message)


class NotFound(AgroGestionError):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} no encontrado: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class DuplicateKey(AgroGestionError):
    code = "DUPLICATE_KEY"
    status_code = 409

    def __init__(self, field: str, value: Optional[Any] = None):
        detail = f" ({value})" if value is not None else ""
        super().__init__(f"Ya existe un registro con el mismo '{field}'{detail}")
        self.field = field
        self.value = value


class InsufficientStock(AgroGestionError):
    code = "INSUFFICIENT_STOCK"
    status_code = 409

    def __init__(self, product_id: Any, requested: float, available: float, product_name: Optional[str] = None):
        name = product_name or product_id
        super().__init__(
            f"Stock insuficiente para {name}: solicitado {requested:g}, disponible {available:g}"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available

    @property
    def extensions(self) -> dict:
        return {
            "code": self.code,
            "productId": str(self.product_id),
            "requested": self.requested,
            "available": self.available,
        }


class ValidationError(AgroGestionError):
    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, field: str, reason: str):
        super().__init__(f"Valor inválido para '{field}': {reason}")
        self.field = field
        self.reason = reason

    @property
    def extensions(self) -> dict:
        return {"code": self.code, "field": self.field}
