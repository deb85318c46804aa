# app/modules/stock_stop/__init__.py
"""
Módulo de Parada de stock

Bandera global que, mientras está activa, bloquea el registro de lotes y
movimientos. Se guarda en Configuraciones con la clave 'StockStop'.

Arquitectura:
- router.py: Endpoints de estado, activación y desactivación
- service.py: Lectura y cambio de la bandera
- repository.py: Acceso a Configuraciones
- schemas.py: Modelos de respuesta
"""

from .router import router
from .service import StockStopService
from .repository import StockStopRepository

__all__ = [
    "router",
    "StockStopService",
    "StockStopRepository"
]
