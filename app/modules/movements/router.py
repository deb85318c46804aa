# app/modules/movements/router.py
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session
from typing import List

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user, get_staff_user
from app.shared.services.notification_service import dashboard_notifier
from .service import MovementsService
from .schemas import MovementCreateRequest, MovementCreatedResponse, MovementResponse

router = APIRouter()


@router.get("/movimientosInventario", response_model=List[MovementResponse])
async def get_movements(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Obtener movimientos de inventario, el más reciente primero"""
    service = MovementsService(db)
    return await service.get_movements()


@router.post("/movimientos", response_model=MovementCreatedResponse, status_code=201)
async def create_movement(
    movement: MovementCreateRequest,
    background_tasks: BackgroundTasks,
    current_user = Depends(get_staff_user),
    db: Session = Depends(get_db)
):
    """
    Registrar un movimiento de inventario

    **Body:**
    ```json
        {
            "IdLote": 1,
            "TipoMovimiento": "Salida",
            "Cantidad": 1,
            "NumSerie": "A1"
        }
    ```

    - Salida: no puede exceder la CantidadActual del lote
    - Entrada: devolución, no puede exceder lo que ha salido del lote
    - Con número de serie: Cantidad = 1 y el código debe estar disponible
    """
    service = MovementsService(db)
    result = await service.create_movement(movement, current_user.id)
    background_tasks.add_task(dashboard_notifier.publish_dashboard)
    return result
