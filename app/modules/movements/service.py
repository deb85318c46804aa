# app/modules/movements/service.py
from sqlalchemy.orm import Session
from typing import List
import logging

from .repository import MovementsRepository
from .schemas import MovementCreateRequest, MovementCreatedResponse, MovementResponse
from app.modules.stock_stop.service import StockStopService
from app.shared.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


class MovementsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = MovementsRepository(db)
        self.stock_stop = StockStopService(db)

    async def get_movements(self) -> List[MovementResponse]:
        return [MovementResponse(**m) for m in self.repository.get_movements()]

    async def create_movement(self, movement_data: MovementCreateRequest, user_id: int) -> MovementCreatedResponse:
        LedgerService.ensure_stock_open(self.stock_stop.is_active(), "movimientos")

        movement = self.repository.create_movement_atomic(movement_data.model_dump(), user_id)
        return MovementCreatedResponse(id=movement.id)
