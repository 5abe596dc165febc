# agrogestion/api/v1/routers/products.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from agrogestion.core.database import get_db
from agrogestion.crud.product import list_products
from agrogestion.models.product import ProductCategory, StockStatus
from agrogestion.services.export_service import FORMAT_PATTERN, download_headers, export_products
from agrogestion.utils.logger import logger

router = APIRouter(tags=["Inventario"])


@router.get(
    "/export",
    summary="Exportar inventario",
    description="Descarga el inventario en CSV o Excel, filtrado por categoría y estado de stock.",
)
def export(
    format: str = Query("csv", pattern=FORMAT_PATTERN),
    category: Optional[ProductCategory] = Query(None),
    stock_status: Optional[StockStatus] = Query(None, alias="stockStatus"),
    active: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    products = list_products(db, category=category, active=active, stock_status=stock_status)
    media_type, headers = download_headers("inventario", format)
    logger.info("Exportación de %s productos en formato %s", len(products), format)
    return Response(content=export_products(products, format), media_type=media_type, headers=headers)
