"""
ProductManager: lista de productos persistida en un único archivo JSON.

Cada operación relee el archivo; las escrituras son atómicas (archivo
temporal + os.replace) y se serializan con un lock.
"""
import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

Product = Dict[str, Any]


class ProductManager:
    def __init__(self, file_path: str):
        self.file = Path(file_path)
        self._lock = threading.RLock()

    def get_products(self) -> List[Product]:
        try:
            with open(self.file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("No se pudo leer %s: %s", self.file, e)
            return []
        return data if isinstance(data, list) else []

    def _write(self, products: List[Product]) -> None:
        temp_path = self.file.with_name(self.file.name + ".tmp")
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(products, f, ensure_ascii=False, indent=2)
        os.replace(temp_path, self.file)

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        return next((p for p in self.get_products() if p.get("id") == product_id), None)

    def add_product(self, product: Product) -> Product:
        with self._lock:
            products = self.get_products()
            new_id = products[-1]["id"] + 1 if products else 1
            new_product = {**product, "id": new_id}
            products.append(new_product)
            self._write(products)
        logger.info("Producto %s agregado", new_id)
        return new_product

    def update_product(self, product_id: int, updated_fields: Product) -> Optional[Product]:
        with self._lock:
            products = self.get_products()
            index = next((i for i, p in enumerate(products) if p.get("id") == product_id), None)
            if index is None:
                return None

            # El id no se puede modificar
            changes = {k: v for k, v in updated_fields.items() if k != "id"}
            products[index] = {**products[index], **changes}
            self._write(products)
            return products[index]

    def delete_product(self, product_id: int) -> bool:
        with self._lock:
            products = self.get_products()
            remaining = [p for p in products if p.get("id") != product_id]
            if len(remaining) == len(products):
                return False
            self._write(remaining)
        logger.info("Producto %s eliminado", product_id)
        return True
