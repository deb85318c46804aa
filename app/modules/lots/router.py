# app/modules/lots/router.py
from fastapi import APIRouter, BackgroundTasks, Depends, Path, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user, get_staff_user
from app.shared.schemas.common import RecordStatus
from app.shared.services.notification_service import dashboard_notifier
from .service import LotsService
from .schemas import LotCreateRequest, LotCreatedResponse, LotResponse, SerialNumberResponse

router = APIRouter()


@router.get("/lotes", response_model=List[LotResponse])
async def get_lots(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Obtener lotes con su producto"""
    service = LotsService(db)
    return await service.get_lots()


@router.get("/lotes/{lot_id}", response_model=LotResponse)
async def get_lot(
    lot_id: int = Path(..., description="ID del lote"),
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    service = LotsService(db)
    return await service.get_lot(lot_id)


@router.get("/lotes/{lot_id}/serial-numbers", response_model=List[SerialNumberResponse])
async def get_lot_serial_numbers(
    lot_id: int = Path(..., description="ID del lote"),
    status: Optional[RecordStatus] = Query(None, alias="estado", description="Activo o Inactivo"),
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Obtener los números de serie de un lote"""
    service = LotsService(db)
    return await service.get_serial_numbers(lot_id, status)


@router.post("/lotes", response_model=LotCreatedResponse, status_code=201)
async def create_lot(
    lot: LotCreateRequest,
    background_tasks: BackgroundTasks,
    current_user = Depends(get_staff_user),
    db: Session = Depends(get_db)
):
    """
    Registrar un lote nuevo

    **Validaciones:**
    - La Parada de stock no debe estar activa (403)
    - El producto debe existir (404)
    - Productos con número de serie: tantos códigos como `cantidad` (400),
      sin repetidos ni ya registrados (409)

    Tras el commit se publican las vistas del tablero a los observadores.
    """
    service = LotsService(db)
    result = await service.create_lot(lot, current_user.id)
    background_tasks.add_task(dashboard_notifier.publish_dashboard)
    return result
