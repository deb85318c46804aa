# app/modules/categories/router.py
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user, get_admin_user
from app.shared.schemas.common import MessageResponse
from .service import CategoriesService
from .schemas import (
    CategoryCreateRequest, CategoryUpdateRequest,
    CategoryResponse, CategoryCreatedResponse
)

router = APIRouter()


@router.get("/categorias", response_model=List[CategoryResponse])
async def get_active_categories(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Obtener categorías activas"""
    service = CategoriesService(db)
    return await service.get_active_categories()


@router.get("/categoriasTodas", response_model=List[CategoryResponse])
async def get_all_categories(
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Obtener todas las categorías, incluidas las inactivas"""
    service = CategoriesService(db)
    return await service.get_all_categories()


@router.get("/categorias/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int = Path(..., description="ID de la categoría"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = CategoriesService(db)
    return await service.get_category(category_id)


@router.post("/categorias", response_model=CategoryCreatedResponse, status_code=201)
async def create_category(
    category: CategoryCreateRequest,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Crear categoría (solo administrador)"""
    service = CategoriesService(db)
    return await service.create_category(category)


@router.put("/categorias/{category_id}", response_model=MessageResponse)
async def update_category(
    category: CategoryUpdateRequest,
    category_id: int = Path(..., description="ID de la categoría"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Actualizar nombre, descripción o estado de una categoría"""
    service = CategoriesService(db)
    return await service.update_category(category_id, category)


@router.delete("/categorias/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: int = Path(..., description="ID de la categoría"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Eliminar (desactivar) una categoría"""
    service = CategoriesService(db)
    return await service.delete_category(category_id)
