"""
Servicio de Ventas.

Flujo de alta de una venta:
1. Validar que haya un usuario autenticado
2. Validar que el cliente exista
3. Cada línea debe referir a un producto existente (en el orden recibido)
   - las cantidades de un mismo producto se suman
   - descuento condicional de stock por producto (UPDATE ... WHERE stock >= cantidad)
4. Total = Σ cantidad × precio unitario informado en la línea
5. Persistir la venta en estado `pending`

Todo ocurre en una sola transacción: si una línea falla se hace rollback y
ningún stock queda descontado.
"""
import logging
from decimal import Decimal
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agrogestion.core.auth import Identity
from agrogestion.core.exceptions import AgroGestionError, InsufficientStock, NotFound, Unauthenticated
from agrogestion.crud import client as client_crud
from agrogestion.crud import product as product_crud
from agrogestion.crud import sale as sale_crud
from agrogestion.models.product import BASE_CURRENCY
from agrogestion.models.sale import Sale, SaleItem, SaleStatus
from agrogestion.schemas.sale import SaleCreate, SaleUpdate
from agrogestion.services.stock_locks import StockLockRegistry, stock_locks

logger = logging.getLogger(__name__)


def line_amount(quantity: float, unit_price: Decimal) -> Decimal:
    # str() evita arrastrar el error binario del float a la aritmética decimal
    return Decimal(str(quantity)) * Decimal(unit_price)


class SaleService:
    """
    Uso:
        service = SaleService(db)
        sale = service.create_sale(payload, actor=identity)
    """

    def __init__(self, db: Session, locks: StockLockRegistry = stock_locks):
        self.db = db
        self.locks = locks

    def create_sale(self, data: SaleCreate, actor: Optional[Identity]) -> Sale:
        if actor is None:
            raise Unauthenticated()

        if not client_crud.get_client(self.db, data.client):
            raise NotFound("Cliente", data.client)

        with self.locks.hold(item.product for item in data.products):
            try:
                sale = self._create_locked(data, actor)
            except AgroGestionError as e:
                self.db.rollback()
                logger.warning("Venta rechazada para cliente %s: %s", data.client, e)
                raise
            except SQLAlchemyError:
                self.db.rollback()
                logger.exception("Error de base de datos al registrar venta")
                raise

        logger.info(
            "Venta %s registrada: cliente=%s total=%s lineas=%s usuario=%s",
            sale.id, sale.client_id, sale.total_amount, len(sale.items), actor.email,
        )
        return sale

    def _create_locked(self, data: SaleCreate, actor: Identity) -> Sale:
        total = Decimal("0")
        items = []
        # Cantidad total pedida por producto, en orden de primera aparición
        requested: Dict[int, float] = {}
        products = {}

        for position, line in enumerate(data.products):
            product = products.get(line.product) or product_crud.get_product(self.db, line.product)
            if not product:
                raise NotFound("Producto", line.product)
            products[product.id] = product
            requested[product.id] = requested.get(product.id, 0) + line.quantity

            total += line_amount(line.quantity, line.unit_price)
            items.append(
                SaleItem(
                    position=position,
                    product_id=product.id,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    currency=line.currency or BASE_CURRENCY,
                )
            )

        for product_id, quantity in requested.items():
            if not product_crud.decrement_stock(self.db, product_id, quantity):
                product = products[product_id]
                self.db.refresh(product)
                raise InsufficientStock(product_id, quantity, product.stock, product.name)

        sale = Sale(
            client_id=data.client,
            items=items,
            total_amount=total,
            payment_method=data.payment_method,
            status=SaleStatus.pending,
            notes=data.notes,
            created_by_id=actor.id,
        )
        self.db.add(sale)
        self.db.commit()
        self.db.refresh(sale)
        return sale

    def update_sale(self, sale_id: int, data: SaleUpdate, actor: Optional[Identity]) -> Sale:
        # Cualquier transición entre estados válidos es aceptada; cancelar no repone stock
        if actor is None:
            raise Unauthenticated()
        sale = sale_crud.update_sale(self.db, sale_id, data)
        logger.info("Venta %s actualizada por %s: estado=%s", sale.id, actor.email, sale.status.value)
        return sale

    def delete_sale(self, sale_id: int, actor: Optional[Identity]) -> bool:
        if actor is None:
            raise Unauthenticated()
        deleted = sale_crud.delete_sale(self.db, sale_id)
        if deleted:
            logger.info("Venta %s eliminada por %s", sale_id, actor.email)
        return deleted
