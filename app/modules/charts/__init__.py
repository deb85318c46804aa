# app/modules/charts/__init__.py
"""
Módulo de Gráficas

Vistas agregadas del tablero. Las mismas consultas alimentan las
notificaciones en tiempo real (ver shared/services/dashboard_service.py).
"""

from .router import router

__all__ = ["router"]
