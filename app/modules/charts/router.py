# app/modules/charts/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user
from app.shared.schemas.common import MovementType
from app.shared.services.dashboard_service import DashboardService
from .schemas import DailyTotal, CurrentLot, LotExpiry, ExpiringLot, ProductBelowMinimum

router = APIRouter()


@router.get("/movimientosxdia", response_model=List[DailyTotal])
async def get_movements_per_day(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Unidades movidas por día (entradas y salidas)"""
    return DashboardService(db).movements_per_day()


@router.get("/entradasxdia", response_model=List[DailyTotal])
async def get_inbound_per_day(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return DashboardService(db).movements_per_day(MovementType.ENTRADA)


@router.get("/salidasxdia", response_model=List[DailyTotal])
async def get_outbound_per_day(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return DashboardService(db).movements_per_day(MovementType.SALIDA)


@router.get("/lotesactuales", response_model=List[CurrentLot])
async def get_current_lots(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return DashboardService(db).current_lots()


@router.get("/caducidadlotes", response_model=List[LotExpiry])
async def get_lots_expiry(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Lotes con fecha de caducidad registrada"""
    return DashboardService(db).lots_with_expiry()


@router.get("/productosPorVencer", response_model=List[ExpiringLot])
async def get_expiring_lots(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Lotes con existencias que caducan dentro del horizonte configurado"""
    return DashboardService(db).expiring_lots()


@router.get("/productosBajoStockMinimo", response_model=List[ProductBelowMinimum])
async def get_products_below_minimum(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Productos con stock total menor a su StockMinimo, mayor faltante primero"""
    return DashboardService(db).products_below_minimum()
