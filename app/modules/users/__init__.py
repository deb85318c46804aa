# app/modules/users/__init__.py
"""
Módulo de Usuarios

- Roles: 1 Administrador, 2 Supervisor, 3 Operador
- Alta, edición, activación/desactivación y restablecimiento de contraseña
"""

from .router import router
from .service import UsersService

__all__ = [
    "router",
    "UsersService"
]
