# agrogestion/crud/product.py
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from agrogestion.core.exceptions import DuplicateKey, NotFound, ValidationError
from agrogestion.crud.base import commit_unique, non_null
from agrogestion.models.mixins import utcnow
from agrogestion.models.product import (
    BASE_CURRENCY,
    LOW_STOCK_THRESHOLD,
    Product,
    ProductCategory,
    StockStatus,
)
from agrogestion.models.sale import SaleItem
from agrogestion.schemas.product import ProductCreate, ProductUpdate


def get_product(db: Session, product_id: int) -> Optional[Product]:
    return db.query(Product).filter(Product.id == product_id).first()


def get_product_by_sku(db: Session, sku: str) -> Optional[Product]:
    return db.query(Product).filter(Product.sku == sku).first()


def list_products(
    db: Session,
    category: Optional[ProductCategory] = None,
    active: Optional[bool] = None,
    stock_status: Optional[StockStatus] = None,
) -> List[Product]:
    query = db.query(Product)
    if category:
        query = query.filter(Product.category == category)
    if active is not None:
        query = query.filter(Product.active == active)
    if stock_status == StockStatus.low:
        query = query.filter(Product.stock < LOW_STOCK_THRESHOLD)
    elif stock_status == StockStatus.out:
        query = query.filter(Product.stock == 0)
    elif stock_status == StockStatus.available:
        query = query.filter(Product.stock > 0)
    return query.order_by(Product.name).all()


def create_product(db: Session, data: ProductCreate) -> Product:
    if get_product_by_sku(db, data.sku):
        raise DuplicateKey("sku", data.sku)

    create_data = data.model_dump(exclude={"price", "currency", "location"})
    obj = Product(
        **create_data,
        price_current=data.price,
        price_currency=data.currency,
        price_last_update=utcnow(),
        location=data.location.model_dump() if data.location else None,
    )
    db.add(obj)
    commit_unique(db, "sku", data.sku)
    db.refresh(obj)
    return obj


def update_product(db: Session, product_id: int, data: ProductUpdate) -> Product:
    product = get_product(db, product_id)
    if not product:
        raise NotFound("Producto", product_id)

    update_data = non_null(data.model_dump(exclude_unset=True, exclude={"price", "currency", "location"}))

    if data.sku and data.sku != product.sku:
        other = get_product_by_sku(db, data.sku)
        if other and other.id != product.id:
            raise DuplicateKey("sku", data.sku)

    # Si hay price, se arma el precio completo
    if data.price is not None:
        update_data["price_current"] = data.price
        update_data["price_currency"] = data.currency or BASE_CURRENCY
        update_data["price_last_update"] = utcnow()
    if data.location is not None:
        update_data["location"] = data.location.model_dump()

    for field, value in update_data.items():
        setattr(product, field, value)
    product.updated_at = utcnow()

    commit_unique(db, "sku", data.sku)
    db.refresh(product)
    return product


def delete_product(db: Session, product_id: int) -> bool:
    product = get_product(db, product_id)
    if not product:
        return False
    if db.query(SaleItem.id).filter(SaleItem.product_id == product_id).first():
        raise ValidationError("id", "el producto figura en ventas registradas")
    db.delete(product)
    db.commit()
    return True


# -----------------------------------------------------
# Descuento condicional de stock
# -----------------------------------------------------
def decrement_stock(db: Session, product_id: int, quantity: float) -> bool:
    """
    Descuenta `quantity` solo si hay stock suficiente, en una única sentencia
    UPDATE ... WHERE stock >= quantity. No confirma la transacción.

    Returns:
        True si se descontó, False si el stock no alcanzaba.
    """
    result = db.execute(
        update(Product)
        .where(Product.id == product_id, Product.stock >= quantity)
        .values(stock=Product.stock - quantity, updated_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1
