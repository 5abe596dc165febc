"""
Exportación de listados (clientes, inventario, ventas) a CSV / Excel.

Mismas columnas que los reportes del front end. Cada listado se arma como
DataFrame y se serializa con export_dataframe.
"""
import io
from typing import Iterable, Tuple

import pandas as pd

from agrogestion.models.client import Client, ClientType
from agrogestion.models.product import Product
from agrogestion.models.sale import PaymentMethod, Sale, SaleStatus

MEDIA_TYPES = {
    "csv": "text/csv; charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

FORMAT_PATTERN = "^(csv|xlsx)$"

CLIENT_COLUMNS = [
    "Nombre",
    "Tipo",
    "Tipo de Documento",
    "Número de Documento",
    "Email",
    "Teléfono",
    "Nombre del Negocio",
    "Dirección",
    "Límite de Crédito",
    "Términos de Pago",
]

PRODUCT_COLUMNS = ["SKU", "Nombre", "Categoría", "Stock", "Unidad", "Precio", "Moneda"]

SALE_COLUMNS = ["ID", "Cliente", "Total", "Estado", "Método de Pago", "Fecha", "Productos"]

SALE_STATUS_LABELS = {
    SaleStatus.completed: "Completada",
    SaleStatus.pending: "Pendiente",
    SaleStatus.cancelled: "Cancelada",
}

PAYMENT_METHOD_LABELS = {
    PaymentMethod.cash: "Efectivo",
    PaymentMethod.credit: "Crédito",
    PaymentMethod.transfer: "Transferencia",
}


def _format_address(address: dict | None) -> str:
    if not address:
        return "-"
    parts = [address.get(k) for k in ("street", "city", "state", "zip_code", "country")]
    return ", ".join(p for p in parts if p) or "-"


def clients_dataframe(clients: Iterable[Client]) -> pd.DataFrame:
    rows = [
        {
            "Nombre": c.name,
            "Tipo": "Individual" if c.type == ClientType.individual else "Empresa",
            "Tipo de Documento": c.document_type.value,
            "Número de Documento": c.document_number,
            "Email": c.email,
            "Teléfono": c.phone,
            "Nombre del Negocio": (c.business_info or {}).get("business_name") or "-",
            "Dirección": _format_address(c.address),
            "Límite de Crédito": float(c.credit_limit),
            "Términos de Pago": c.payment_terms,
        }
        for c in clients
    ]
    return pd.DataFrame(rows, columns=CLIENT_COLUMNS)


def products_dataframe(products: Iterable[Product]) -> pd.DataFrame:
    rows = [
        {
            "SKU": p.sku,
            "Nombre": p.name,
            "Categoría": p.category.value,
            "Stock": p.stock,
            "Unidad": p.unit.value,
            "Precio": float(p.price_current),
            "Moneda": p.price_currency.value,
        }
        for p in products
    ]
    return pd.DataFrame(rows, columns=PRODUCT_COLUMNS)


def _sale_lines(sale: Sale) -> str:
    return ", ".join(
        f"{item.product.name} ({item.quantity:g} x ${float(item.unit_price):g})" for item in sale.items
    )


def sales_dataframe(sales: Iterable[Sale]) -> pd.DataFrame:
    rows = [
        {
            "ID": s.id,
            "Cliente": s.client.name,
            "Total": float(s.total_amount),
            "Estado": SALE_STATUS_LABELS[s.status],
            "Método de Pago": PAYMENT_METHOD_LABELS[s.payment_method],
            "Fecha": s.created_at.date().isoformat() if s.created_at else "",
            "Productos": _sale_lines(s),
        }
        for s in sales
    ]
    return pd.DataFrame(rows, columns=SALE_COLUMNS)


def export_dataframe(df: pd.DataFrame, fmt: str, sheet_name: str) -> bytes:
    buffer = io.BytesIO()
    if fmt == "xlsx":
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    else:
        buffer.write(df.to_csv(index=False).encode("utf-8-sig"))
    return buffer.getvalue()


def export_clients(clients: Iterable[Client], fmt: str) -> bytes:
    return export_dataframe(clients_dataframe(clients), fmt, "Clientes")


def export_products(products: Iterable[Product], fmt: str) -> bytes:
    return export_dataframe(products_dataframe(products), fmt, "Inventario")


def export_sales(sales: Iterable[Sale], fmt: str) -> bytes:
    return export_dataframe(sales_dataframe(sales), fmt, "Ventas")


def download_headers(basename: str, fmt: str) -> Tuple[str, dict]:
    """Media type y Content-Disposition para la descarga `<basename>.<fmt>`."""
    return MEDIA_TYPES[fmt], {"Content-Disposition": f'attachment; filename="{basename}.{fmt}"'}
