# agrogestion/crud/client.py
from typing import List, Optional

from sqlalchemy.orm import Session

from agrogestion.core.exceptions import DuplicateKey, NotFound, ValidationError
from agrogestion.crud.base import commit_unique, non_null
from agrogestion.models.client import Client, ClientStatus, ClientType, DocumentType
from agrogestion.models.mixins import utcnow
from agrogestion.models.sale import Sale
from agrogestion.schemas.client import ClientCreate, ClientUpdate


# -----------------------------------------------------
# Obtener cliente por ID
# -----------------------------------------------------
def get_client(db: Session, client_id: int) -> Optional[Client]:
    return db.query(Client).filter(Client.id == client_id).first()


def get_client_by_document(db: Session, document_number: str) -> Optional[Client]:
    return db.query(Client).filter(Client.document_number == document_number).first()


# -----------------------------------------------------
# Listar clientes (con filtros opcionales)
# -----------------------------------------------------
def list_clients(
    db: Session,
    status: Optional[ClientStatus] = None,
    type: Optional[ClientType] = None,
    document_type: Optional[DocumentType] = None,
) -> List[Client]:
    query = db.query(Client)
    if status:
        query = query.filter(Client.status == status)
    if type:
        query = query.filter(Client.type == type)
    if document_type:
        query = query.filter(Client.document_type == document_type)
    return query.order_by(Client.name).all()


# -----------------------------------------------------
# Crear cliente
# -----------------------------------------------------
def create_client(db: Session, data: ClientCreate, created_by_id: int) -> Client:
    if get_client_by_document(db, data.document_number):
        raise DuplicateKey("documentNumber", data.document_number)

    create_data = data.model_dump(exclude={"address", "business_info"})
    obj = Client(
        **create_data,
        address=data.address.model_dump() if data.address else None,
        business_info=data.business_info.model_dump() if data.business_info else None,
        created_by_id=created_by_id,
    )
    db.add(obj)
    commit_unique(db, "documentNumber", data.document_number)
    db.refresh(obj)
    return obj


# -----------------------------------------------------
# Actualizar cliente (merge parcial de campos)
# -----------------------------------------------------
def update_client(db: Session, client_id: int, data: ClientUpdate) -> Client:
    client = get_client(db, client_id)
    if not client:
        raise NotFound("Cliente", client_id)

    update_data = non_null(data.model_dump(exclude_unset=True, exclude={"address", "business_info"}))
    if data.address is not None:
        update_data["address"] = data.address.model_dump()
    if data.business_info is not None:
        update_data["business_info"] = data.business_info.model_dump()

    for field, value in update_data.items():
        setattr(client, field, value)
    client.updated_at = utcnow()

    db.commit()
    db.refresh(client)
    return client


def delete_client(db: Session, client_id: int) -> bool:
    client = get_client(db, client_id)
    if not client:
        return False
    if db.query(Sale.id).filter(Sale.client_id == client_id).first():
        raise ValidationError("id", "el cliente tiene ventas registradas")
    db.delete(client)
    db.commit()
    return True
