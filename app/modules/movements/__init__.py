# app/modules/movements/__init__.py
"""
Módulo de Movimientos de Inventario

Salidas y devoluciones (Entradas) contra un lote, con bloqueo de fila,
actualización de CantidadActual y del estado del número de serie en una
sola transacción.
"""

from .router import router
from .service import MovementsService

__all__ = [
    "router",
    "MovementsService"
]
