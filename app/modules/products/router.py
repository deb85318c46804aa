# app/modules/products/router.py
from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user, get_admin_user
from app.shared.schemas.common import MessageResponse
from .service import ProductsService
from .schemas import (
    ProductCreateRequest, ProductUpdateRequest, ProductResponse,
    ProductCreatedResponse, KardexEntry, OpeningBalanceResponse,
    ProductDailyMovements
)

router = APIRouter()


@router.get("/productos", response_model=List[ProductResponse])
async def get_products(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Obtener productos con su stock actual"""
    service = ProductsService(db)
    return await service.get_products()


@router.get("/productos/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int = Path(..., description="ID del producto"),
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = ProductsService(db)
    return await service.get_product(product_id)


@router.post("/productos", response_model=ProductCreatedResponse, status_code=201)
async def create_product(
    product: ProductCreateRequest,
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Crear producto

    **Validaciones:**
    - StockMinimo >= 0
    - StockMaximo >= StockMinimo
    - La categoría debe existir y estar activa
    """
    service = ProductsService(db)
    return await service.create_product(product)


@router.put("/productos/{product_id}", response_model=MessageResponse)
async def update_product(
    product: ProductUpdateRequest,
    product_id: int = Path(..., description="ID del producto"),
    current_user = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    service = ProductsService(db)
    return await service.update_product(product_id, product)


@router.get("/productos/{product_id}/kardex", response_model=List[KardexEntry])
async def get_product_kardex(
    product_id: int = Path(..., description="ID del producto"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Obtener el KARDEX de un producto con filtrado por fechas"""
    service = ProductsService(db)
    return await service.get_kardex(product_id, start_date, end_date)


@router.get("/productos/{product_id}/saldoInicial", response_model=OpeningBalanceResponse)
async def get_product_opening_balance(
    product_id: int = Path(..., description="ID del producto"),
    start_date: datetime = Query(..., alias="startDate"),
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Obtener el saldo antes del rango de fechas"""
    service = ProductsService(db)
    return await service.get_opening_balance(product_id, start_date)


@router.get("/productos/{product_id}/movimientos", response_model=List[ProductDailyMovements])
async def get_product_daily_movements(
    product_id: int = Path(..., description="ID del producto"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Entradas y salidas por día de un producto, para la gráfica"""
    service = ProductsService(db)
    return await service.get_daily_movements(product_id, start_date, end_date)
