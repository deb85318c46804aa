# app/modules/stock_stop/service.py
from sqlalchemy.orm import Session
import logging

from .repository import StockStopRepository
from .schemas import StockStopStatusResponse
from app.shared.schemas.common import MessageResponse

logger = logging.getLogger(__name__)


class StockStopService:
    """
    Bandera global "Parada de stock".

    Se lee en cada solicitud que registra lotes o movimientos y se pasa como
    parámetro a las reglas del ledger. Ausente equivale a desactivada.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = StockStopRepository(db)

    def is_active(self) -> bool:
        return self.repository.get_value() == "true"

    async def get_status(self) -> StockStopStatusResponse:
        return StockStopStatusResponse(stock_stop_active=self.is_active())

    async def set_active(self, active: bool, user_id: int) -> MessageResponse:
        self.repository.set_value(active)
        logger.info(
            f"Parada de stock {'activada' if active else 'desactivada'} por usuario {user_id}"
        )
        return MessageResponse(
            message="Parada de stock activada" if active else "Parada de stock desactivada"
        )
