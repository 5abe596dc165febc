from contextlib import asynccontextmanager

from fastapi import FastAPI

from agrogestion.core.config import settings
from agrogestion.core.database import engine, SessionLocal
from agrogestion.db.base import Base
from agrogestion.db.init_db import create_default_admin
from agrogestion.utils.logger import logger

import agrogestion.models  # noqa: F401  registra los modelos en Base.metadata


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Maneja startup/shutdown de la app.
    """
    # --- Startup ---
    logger.info("Iniciando aplicación AgroGestión (%s)...", settings.environment)

    if settings.environment == "development":
        Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    try:
        create_default_admin(session)
    finally:
        session.close()

    logger.info("Startup completado correctamente")

    # La app se levanta aquí
    yield

    # --- Shutdown ---
    logger.info("Aplicación apagándose...")
    engine.dispose()
