"""AgroGestión: clientes, inventario y ventas con API GraphQL."""
__version__ = "1.0.0"
