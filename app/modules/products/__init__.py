# app/modules/products/__init__.py
"""
Módulo de Productos

- Catálogo de productos con stock actual (suma de lotes)
- Alta y edición (solo administrador)
- Kardex con saldo acumulado, saldo inicial y movimientos por día
"""

from .router import router
from .service import ProductsService
from .repository import ProductsRepository

__all__ = [
    "router",
    "ProductsService",
    "ProductsRepository"
]
