# agrogestion/api/v1/routers/clients.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from agrogestion.core.database import get_db
from agrogestion.crud.client import list_clients
from agrogestion.models.client import ClientStatus, ClientType, DocumentType
from agrogestion.services.export_service import FORMAT_PATTERN, download_headers, export_clients
from agrogestion.utils.logger import logger

router = APIRouter(tags=["Clientes"])


@router.get(
    "/export",
    summary="Exportar clientes",
    description="Descarga el listado de clientes en CSV o Excel, con los mismos filtros que el listado.",
)
def export(
    format: str = Query("csv", pattern=FORMAT_PATTERN),
    type: Optional[ClientType] = Query(None),
    document_type: Optional[DocumentType] = Query(None, alias="documentType"),
    status: Optional[ClientStatus] = Query(None),
    db: Session = Depends(get_db),
):
    clients = list_clients(db, status=status, type=type, document_type=document_type)
    media_type, headers = download_headers("clientes", format)
    content = export_clients(clients, format)
    logger.info("Exportación de %s clientes en formato %s", len(clients), format)
    return Response(content=content, media_type=media_type, headers=headers)
