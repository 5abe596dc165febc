from typing import Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from agrogestion.core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def validate_input(model: Type[ModelT], data: dict) -> ModelT:
    """
    Construye el esquema de entrada y traduce el primer error de pydantic
    a un ValidationError de negocio (campo + motivo).
    """
    try:
        return model(**data)
    except PydanticValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error.get("loc", ())) or model.__name__
        raise ValidationError(field, error.get("msg", "valor inválido")) from exc
