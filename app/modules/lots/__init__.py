# app/modules/lots/__init__.py
"""
Módulo de Lotes

- Registro atómico de lote + números de serie
- Listado de lotes y números de serie por estado
- Bloqueado mientras la Parada de stock está activa
"""

from .router import router
from .service import LotsService
from .repository import LotsRepository

__all__ = [
    "router",
    "LotsService",
    "LotsRepository"
]
