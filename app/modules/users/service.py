# app/modules/users/service.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List
import logging

from .repository import UsersRepository
from .schemas import (
    UserCreateRequest, UserUpdateRequest, PasswordResetRequest,
    UserCreatedResponse, RoleResponse
)
from app.core.auth.schemas import UserResponse
from app.core.auth.service import AuthService
from app.core.exceptions import NotFoundError, ConflictError
from app.shared.schemas.common import MessageResponse

logger = logging.getLogger(__name__)


class UsersService:
    """Administración de usuarios (solo rol Administrador)"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = UsersRepository(db)

    async def get_roles(self) -> List[RoleResponse]:
        return [RoleResponse.model_validate(r) for r in self.repository.get_roles()]

    async def get_users(self) -> List[UserResponse]:
        return [UserResponse.model_validate(u) for u in self.repository.get_users()]

    async def get_user(self, user_id: int) -> UserResponse:
        user = self.repository.get_user(user_id)
        if not user:
            raise NotFoundError("El usuario especificado no existe.")
        return UserResponse.model_validate(user)

    async def create_user(self, user_data: UserCreateRequest) -> UserCreatedResponse:
        data = user_data.model_dump()

        if self.repository.get_by_username(data['username']):
            logger.warning(f"Alta rechazada, usuario duplicado: '{data['username']}'")
            raise ConflictError("El usuario ya existe. Por favor, elige otro.")

        password_hash = AuthService.get_password_hash(data['password'])
        try:
            user = self.repository.create_user(data, password_hash)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("El usuario ya existe en el sistema.")

        logger.info(f"Usuario creado: #{user.id} '{user.username}' (rol {user.role_id})")
        return UserCreatedResponse(message="Usuario creado exitosamente.", id=user.id)

    async def update_user(self, user_id: int, user_data: UserUpdateRequest) -> MessageResponse:
        user = self.repository.get_user(user_id)
        if not user:
            raise NotFoundError("El usuario especificado no existe.")

        data = user_data.model_dump(mode="json")

        if self.repository.get_by_username(data['username'], exclude_id=user_id):
            raise ConflictError("El nombre de usuario ya está en uso por otro usuario.")

        try:
            self.repository.update_user(user, data)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("El nombre de usuario ya existe en el sistema.")

        logger.info(f"Usuario actualizado: #{user_id} (estado {data['status']})")
        return MessageResponse(message="Usuario actualizado exitosamente.")

    async def reset_password(self, reset_data: PasswordResetRequest) -> MessageResponse:
        user = self.repository.get_by_username(reset_data.username)
        if not user:
            raise NotFoundError("El usuario especificado no existe.")

        self.repository.update_password(user, AuthService.get_password_hash(reset_data.new_password))
        logger.info(f"Contraseña restablecida para '{user.username}'")
        return MessageResponse(message="Contraseña restablecida correctamente.")
