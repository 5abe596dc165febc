from fastapi import APIRouter

# Importa cada módulo de rutas
from agrogestion.api.v1.routers import clients, products, sales

# Router principal con prefijo global
api_router = APIRouter(prefix="/api/v1")


# Endpoint raíz para verificar que la API funciona
@api_router.get("/", tags=["Root"])
def read_root():
    return {"message": "Bienvenido a la API v1 de AgroGestión", "graphql": "/graphql"}


@api_router.get("/health", tags=["Root"])
def health():
    return {"status": "healthy", "app": "agrogestion"}


# Registro de módulos de rutas
api_router.include_router(clients.router, prefix="/clients", tags=["Clientes"])
api_router.include_router(products.router, prefix="/products", tags=["Inventario"])
api_router.include_router(sales.router, prefix="/sales", tags=["Ventas"])
