# agrogestion/api/v1/routers/sales.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from agrogestion.core.database import get_db
from agrogestion.crud.sale import list_sales
from agrogestion.models.sale import PaymentMethod, SaleStatus
from agrogestion.services.export_service import FORMAT_PATTERN, download_headers, export_sales
from agrogestion.utils.logger import logger

router = APIRouter(tags=["Ventas"])


@router.get(
    "/export",
    summary="Exportar ventas",
    description="Descarga las ventas en CSV o Excel, filtradas por cliente, estado y método de pago.",
)
def export(
    format: str = Query("csv", pattern=FORMAT_PATTERN),
    client: Optional[int] = Query(None),
    status: Optional[SaleStatus] = Query(None),
    payment_method: Optional[PaymentMethod] = Query(None, alias="paymentMethod"),
    db: Session = Depends(get_db),
):
    sales = list_sales(db, client_id=client, status=status, payment_method=payment_method)
    media_type, headers = download_headers("ventas", format)
    logger.info("Exportación de %s ventas en formato %s", len(sales), format)
    return Response(content=export_sales(sales, format), media_type=media_type, headers=headers)
