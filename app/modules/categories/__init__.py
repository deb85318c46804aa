# app/modules/categories/__init__.py
"""
Módulo de Categorías

- Listado de categorías activas y de todas las categorías
- Alta, edición y baja lógica (Estado = Inactivo)
- Nombre único entre categorías activas
"""

from .router import router
from .service import CategoriesService
from .repository import CategoriesRepository

__all__ = [
    "router",
    "CategoriesService",
    "CategoriesRepository"
]
