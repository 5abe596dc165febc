import logging
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Request, status
from fastapi.responses import JSONResponse, Response

from productos_json.config import settings
from productos_json.manager import ProductManager

logger = logging.getLogger("productos_json")

REQUIRED_FIELDS = ("title", "price", "description")
NOT_FOUND = {"error": "Producto no encontrado"}


def get_manager(request: Request) -> ProductManager:
    return request.app.state.manager


def parse_id(pid: str) -> Optional[int]:
    # Un id no numérico se trata como producto inexistente
    try:
        return int(pid)
    except ValueError:
        return None


def create_app(manager: Optional[ProductManager] = None) -> FastAPI:
    app = FastAPI(title="Productos JSON", version="1.0.0")
    app.state.manager = manager or ProductManager(settings.products_file)

    @app.get("/products")
    def list_products(request: Request):
        return {"products": get_manager(request).get_products()}

    @app.get("/products/{pid}")
    def get_product(pid: str, request: Request):
        product_id = parse_id(pid)
        product = get_manager(request).get_product_by_id(product_id) if product_id is not None else None
        if product is None:
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=NOT_FOUND)
        return product

    @app.post("/products", status_code=status.HTTP_201_CREATED)
    def create_product(request: Request, payload: Dict[str, Any] = Body(...)):
        if any(not payload.get(field) for field in REQUIRED_FIELDS):
            logger.warning("Alta de producto rechazada: faltan campos requeridos")
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"error": "Faltan campos requeridos"},
            )
        return get_manager(request).add_product(payload)

    @app.put("/products/{pid}")
    def update_product(pid: str, request: Request, payload: Dict[str, Any] = Body(...)):
        product_id = parse_id(pid)
        product = get_manager(request).update_product(product_id, payload) if product_id is not None else None
        if product is None:
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=NOT_FOUND)
        return product

    @app.delete("/products/{pid}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_product(pid: str, request: Request):
        product_id = parse_id(pid)
        if product_id is None or not get_manager(request).delete_product(product_id):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=NOT_FOUND)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


app = create_app()
