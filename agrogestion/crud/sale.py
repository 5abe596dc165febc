# agrogestion/crud/sale.py
from typing import List, Optional

from sqlalchemy.orm import Session

from agrogestion.core.exceptions import NotFound
from agrogestion.crud.base import non_null
from agrogestion.models.mixins import utcnow
from agrogestion.models.sale import PaymentMethod, Sale, SaleStatus
from agrogestion.schemas.sale import SaleUpdate


def get_sale(db: Session, sale_id: int) -> Optional[Sale]:
    return db.query(Sale).filter(Sale.id == sale_id).first()


def list_sales(
    db: Session,
    client_id: Optional[int] = None,
    status: Optional[SaleStatus] = None,
    payment_method: Optional[PaymentMethod] = None,
) -> List[Sale]:
    query = db.query(Sale)
    if client_id:
        query = query.filter(Sale.client_id == client_id)
    if status:
        query = query.filter(Sale.status == status)
    if payment_method:
        query = query.filter(Sale.payment_method == payment_method)
    return query.order_by(Sale.created_at.desc(), Sale.id.desc()).all()


def update_sale(db: Session, sale_id: int, data: SaleUpdate) -> Sale:
    sale = get_sale(db, sale_id)
    if not sale:
        raise NotFound("Venta", sale_id)

    for field, value in non_null(data.model_dump(exclude_unset=True)).items():
        setattr(sale, field, value)
    sale.updated_at = utcnow()

    db.commit()
    db.refresh(sale)
    return sale


def delete_sale(db: Session, sale_id: int) -> bool:
    sale = get_sale(db, sale_id)
    if not sale:
        return False
    db.delete(sale)
    db.commit()
    return True
