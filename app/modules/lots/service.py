# app/modules/lots/service.py
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from .repository import LotsRepository
from .schemas import LotCreateRequest, LotCreatedResponse, LotResponse, SerialNumberResponse
from app.core.exceptions import NotFoundError, ConflictError
from app.modules.stock_stop.service import StockStopService
from app.shared.schemas.common import RecordStatus
from app.shared.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


class LotsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = LotsRepository(db)
        self.stock_stop = StockStopService(db)

    async def get_lots(self) -> List[LotResponse]:
        return [LotResponse(**lot) for lot in self.repository.get_lots()]

    async def get_lot(self, lot_id: int) -> LotResponse:
        lot = self.repository.get_lot(lot_id)
        if not lot:
            raise NotFoundError("El lote especificado no existe.")
        return LotResponse(**lot)

    async def get_serial_numbers(
        self,
        lot_id: int,
        status: Optional[RecordStatus] = None
    ) -> List[SerialNumberResponse]:
        """Números de serie del lote, opcionalmente filtrados por Estado"""
        if not self.repository.lot_exists(lot_id):
            raise NotFoundError("El lote especificado no existe.")
        units = self.repository.get_serial_numbers(lot_id, status.value if status else None)
        return [SerialNumberResponse.model_validate(unit) for unit in units]

    async def create_lot(self, lot_data: LotCreateRequest, user_id: int) -> LotCreatedResponse:
        """
        Registrar lote nuevo.

        Todas las validaciones ocurren antes de escribir: Parada de stock,
        existencia del producto, cantidad y números de serie (cantidad exacta,
        sin repetidos, inexistentes en el sistema).
        """
        LedgerService.ensure_stock_open(self.stock_stop.is_active(), "nuevas entradas")

        product = self.repository.get_product(lot_data.product_id)
        if not product:
            raise NotFoundError("El producto especificado no existe.")

        serial_codes = LedgerService.validate_lot_registration(
            bool(product.has_serial), lot_data.quantity, lot_data.serial_numbers
        )

        existing = self.repository.find_existing_serials(serial_codes)
        if existing:
            logger.warning(f"Números de serie ya registrados: {existing}")
            raise ConflictError(
                f"Uno o más números de serie ya existen en el sistema: {', '.join(existing)}"
            )

        lot = self.repository.create_lot_atomic(
            lot_data.model_dump(), product, serial_codes, user_id
        )
        logger.info(
            f"Lote #{lot.id} registrado: producto #{product.id}, "
            f"cantidad {lot.initial_quantity}, usuario {user_id}"
        )
        return LotCreatedResponse(id=lot.id)
