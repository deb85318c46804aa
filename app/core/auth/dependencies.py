from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.shared.database.models import User
from app.core.auth.service import AuthService

# Roles del sistema (tabla Roles)
ROLE_ADMIN = 1
ROLE_SUPERVISOR = 2
ROLE_OPERATOR = 3
ALL_ROLES = [ROLE_ADMIN, ROLE_SUPERVISOR, ROLE_OPERATOR]

security = HTTPBearer(auto_error=False)


class AuthenticationError(HTTPException):
    error_code = "unauthenticated"

    def __init__(self, detail: str = "Usuario no autenticado."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(HTTPException):
    error_code = "forbidden"

    def __init__(self, detail: str = "Acceso denegado."):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


def decode_role_token(token: Optional[str]) -> dict:
    """Validar token y devolver su payload; debe incluir IdUsuario e IdRol"""
    if not token:
        raise AuthenticationError("Token no proporcionado.")

    payload = AuthService.verify_token(token)
    if payload is None:
        raise AuthenticationError("Token inválido o expirado.")

    if payload.get("IdUsuario") is None or payload.get("IdRol") is None:
        raise AuthenticationError("Payload del token inválido.")

    return payload


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Obtener usuario actual desde el token"""
    payload = decode_role_token(credentials.credentials if credentials else None)

    user = db.query(User).filter(User.id == payload["IdUsuario"]).first()

    if user is None:
        raise AuthenticationError("Usuario no encontrado.")

    if not user.is_active:
        raise AuthenticationError("Usuario inactivo.")

    return user


def require_roles(allowed_roles: List[int]):
    """Factory para crear dependency que requiere roles específicos"""
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role_id not in allowed_roles:
            raise AuthorizationError(
                f"Rol {current_user.role_id} no autorizado. Roles permitidos: {allowed_roles}"
            )
        return current_user
    return role_checker


# Dependencies específicas por rol
def get_admin_user(current_user: User = Depends(require_roles([ROLE_ADMIN]))):
    """Dependency para administradores"""
    return current_user


def get_supervisor_user(current_user: User = Depends(require_roles([ROLE_ADMIN, ROLE_SUPERVISOR]))):
    """Dependency para administradores y supervisores"""
    return current_user


def get_staff_user(current_user: User = Depends(require_roles(ALL_ROLES))):
    """Dependency para cualquier rol operativo"""
    return current_user
