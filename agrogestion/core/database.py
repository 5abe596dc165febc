from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from agrogestion.core.config import settings
from agrogestion.db.base import Base  # <- Se importa la Base aquí


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """SQLite no valida claves foráneas salvo que se active en cada conexión."""
    if target.dialect.name != "sqlite":
        return

    @event.listens_for(target, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _connect_args(url: str) -> dict:
    # SQLite: las sesiones se comparten entre el threadpool de FastAPI
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


# Engine de conexión
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    future=True,
    connect_args=_connect_args(settings.database_url),
)
enable_sqlite_foreign_keys(engine)

# Sesión de base de datos
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency de FastAPI para obtener una sesión de base de datos.
    Garantiza que la sesión se cierre al finalizar.
    """
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
