from fastapi import FastAPI

from agrogestion.api.v1.routers import api_router
from agrogestion.core.error_handlers import register_error_handlers
from agrogestion.core.lifespan import lifespan
from agrogestion.core.logging_middleware import log_requests
from agrogestion.graphql.router import graphql_router
from agrogestion.utils.cors import setup_cors


def create_app() -> FastAPI:
    app = FastAPI(
        title="AgroGestión",
        version="1.0.0",
        description="Gestión de clientes, inventario y ventas para negocios agropecuarios",
        lifespan=lifespan,
    )

    # --- Configuración CORS ---
    setup_cors(app)

    app.middleware("http")(log_requests)
    register_error_handlers(app)

    # --- Rutas centralizadas ---
    app.include_router(api_router)
    app.include_router(graphql_router, prefix="/graphql")

    return app


app = create_app()
