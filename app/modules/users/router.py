# app/modules/users/router.py
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_admin_user
from app.core.auth.schemas import UserResponse
from app.shared.schemas.common import MessageResponse
from .service import UsersService
from .schemas import (
    UserCreateRequest, UserUpdateRequest, PasswordResetRequest,
    UserCreatedResponse, RoleResponse
)

router = APIRouter()


@router.get("/roles", response_model=List[RoleResponse])
async def get_roles(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Obtener todos los roles"""
    service = UsersService(db)
    return await service.get_roles()


@router.get("/usuarios", response_model=List[UserResponse])
async def get_users(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = UsersService(db)
    return await service.get_users()


@router.get("/usuarios/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int = Path(..., description="ID del usuario"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = UsersService(db)
    return await service.get_user(user_id)


@router.post("/nuevoUsuario", response_model=UserCreatedResponse, status_code=201)
async def create_user(
    user: UserCreateRequest,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Registrar nuevo usuario

    **Body:**
    ```json
        {
            "usuario": "jperez",
            "nombre": "Juan",
            "apellidoPaterno": "Pérez",
            "contraseña": "secreto123",
            "IdRol": 3
        }
    ```
    """
    service = UsersService(db)
    return await service.create_user(user)


@router.put("/usuarios/{user_id}", response_model=MessageResponse)
async def update_user(
    user: UserUpdateRequest,
    user_id: int = Path(..., description="ID del usuario"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Actualizar datos, rol o estado de un usuario"""
    service = UsersService(db)
    return await service.update_user(user_id, user)


@router.post("/restablecerPassword", response_model=MessageResponse)
async def reset_password(
    reset: PasswordResetRequest,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = UsersService(db)
    return await service.reset_password(reset)
