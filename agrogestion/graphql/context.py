import logging
import time
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session
from strawberry.extensions import SchemaExtension
from strawberry.fastapi import BaseContext

from agrogestion.core.auth import Identity, authorize, get_identity, load_identity
from agrogestion.core.database import get_db

logger = logging.getLogger(__name__)

ROOT_TYPES = {"Query", "Mutation"}


class GraphQLContext(BaseContext):
    """Contexto por request: sesión de base de datos e identidad del llamador."""

    def __init__(self, db: Session, identity: Optional[Identity]):
        super().__init__()
        self.db = db
        self.identity = identity


async def get_context(
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_identity),
) -> GraphQLContext:
    return GraphQLContext(db=db, identity=load_identity(db, identity))


class AccessGateExtension(SchemaExtension):
    """
    Interceptor de autorización: antes de resolver cada campo raíz consulta
    la tabla de políticas con el nombre de la operación.
    """

    def resolve(self, _next, root, info, *args, **kwargs):
        if info.parent_type.name in ROOT_TYPES and not info.field_name.startswith("__"):
            authorize(info.field_name, info.context.identity)
        return _next(root, info, *args, **kwargs)


class OperationLoggingExtension(SchemaExtension):
    """Registra nombre de operación, llamador y duración de cada ejecución GraphQL."""

    def on_execute(self):
        start = time.perf_counter()
        yield
        elapsed_ms = (time.perf_counter() - start) * 1000
        context = self.execution_context
        identity = getattr(context.context, "identity", None)
        logger.info(
            "GraphQL %s por %s (%.1f ms)",
            context.operation_name or "<anónima>",
            identity.email if identity else "anónimo",
            elapsed_ms,
        )
