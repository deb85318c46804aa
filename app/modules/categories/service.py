# app/modules/categories/service.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List
import logging

from .repository import CategoriesRepository
from .schemas import (
    CategoryCreateRequest, CategoryUpdateRequest,
    CategoryResponse, CategoryCreatedResponse
)
from app.core.exceptions import NotFoundError, ConflictError
from app.shared.schemas.common import MessageResponse, RecordStatus

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "El nombre de la categoría ya existe."


class CategoriesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = CategoriesRepository(db)

    async def get_active_categories(self) -> List[CategoryResponse]:
        return [CategoryResponse.model_validate(c) for c in self.repository.get_active_categories()]

    async def get_all_categories(self) -> List[CategoryResponse]:
        return [CategoryResponse.model_validate(c) for c in self.repository.get_all_categories()]

    def _get_or_404(self, category_id: int):
        category = self.repository.get_category(category_id)
        if not category:
            raise NotFoundError("La categoría especificada no existe.")
        return category

    async def get_category(self, category_id: int) -> CategoryResponse:
        return CategoryResponse.model_validate(self._get_or_404(category_id))

    async def create_category(self, category_data: CategoryCreateRequest) -> CategoryCreatedResponse:
        """Crear categoría activa; el nombre debe ser único entre las activas"""
        data = category_data.model_dump(mode="json")

        if self.repository.find_active_by_name(data['name']):
            raise ConflictError(DUPLICATE_NAME)

        try:
            category = self.repository.create_category(data)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(DUPLICATE_NAME)

        logger.info(f"Categoría creada: #{category.id} '{category.name}'")
        return CategoryCreatedResponse(id=category.id)

    async def update_category(self, category_id: int, category_data: CategoryUpdateRequest) -> MessageResponse:
        category = self._get_or_404(category_id)
        data = category_data.model_dump(mode="json")

        final_status = data.get('status') or category.status
        if final_status == RecordStatus.ACTIVE.value and self.repository.find_active_by_name(
            data['name'], exclude_id=category_id
        ):
            raise ConflictError(DUPLICATE_NAME)

        try:
            self.repository.update_category(category, data)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(DUPLICATE_NAME)

        logger.info(f"Categoría actualizada: #{category_id}")
        return MessageResponse(message="Categoría actualizada exitosamente.")

    async def delete_category(self, category_id: int) -> MessageResponse:
        """Baja lógica: Estado = Inactivo"""
        category = self._get_or_404(category_id)
        self.repository.deactivate_category(category)
        logger.info(f"Categoría desactivada: #{category_id}")
        return MessageResponse(message="Categoría eliminada exitosamente.")
