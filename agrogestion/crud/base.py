from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from agrogestion.core.exceptions import DuplicateKey

# Mensajes de violación de unicidad: SQLite ("UNIQUE constraint failed"),
# MySQL (1062 "Duplicate entry") y PostgreSQL ("duplicate key value")
_UNIQUE_MARKERS = ("unique constraint", "duplicate entry", "duplicate key")


def is_unique_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig).lower()
    return any(marker in message for marker in _UNIQUE_MARKERS)


def commit_unique(db: Session, field: str, value: Any = None) -> None:
    """
    Confirma la transacción; solo una violación de unicidad se traduce a
    DuplicateKey. Claves foráneas o NOT NULL se propagan tal cual.
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if is_unique_violation(exc):
            raise DuplicateKey(field, value) from exc
        raise


def non_null(data: dict) -> dict:
    # Limpiar campos no enviados
    return {k: v for k, v in data.items() if v is not None}
