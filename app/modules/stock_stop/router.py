# app/modules/stock_stop/router.py
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_current_user, get_supervisor_user
from app.shared.schemas.common import MessageResponse
from app.shared.services.notification_service import dashboard_notifier
from .service import StockStopService
from .schemas import StockStopStatusResponse

router = APIRouter()


@router.get("/status", response_model=StockStopStatusResponse)
async def get_stock_stop_status(
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Consultar si la Parada de stock está activa"""
    service = StockStopService(db)
    return await service.get_status()


@router.post("/activate", response_model=MessageResponse)
async def activate_stock_stop(
    background_tasks: BackgroundTasks,
    current_user = Depends(get_supervisor_user),
    db: Session = Depends(get_db)
):
    """
    Activar la Parada de stock

    Mientras esté activa se rechazan nuevos lotes y movimientos (403).
    """
    service = StockStopService(db)
    result = await service.set_active(True, current_user.id)
    background_tasks.add_task(dashboard_notifier.publish_stock_stop, True)
    return result


@router.post("/deactivate", response_model=MessageResponse)
async def deactivate_stock_stop(
    background_tasks: BackgroundTasks,
    current_user = Depends(get_supervisor_user),
    db: Session = Depends(get_db)
):
    """Desactivar la Parada de stock"""
    service = StockStopService(db)
    result = await service.set_active(False, current_user.id)
    background_tasks.add_task(dashboard_notifier.publish_stock_stop, False)
    return result
