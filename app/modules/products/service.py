# app/modules/products/service.py
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime
import logging

from .repository import ProductsRepository
from .schemas import (
    ProductCreateRequest, ProductUpdateRequest, ProductResponse,
    ProductCreatedResponse, KardexEntry, OpeningBalanceResponse,
    ProductDailyMovements
)
from app.core.exceptions import NotFoundError, InvalidRequestError
from app.shared.schemas.common import MovementType, MessageResponse, RecordStatus
from app.shared.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

ORIGIN_LOT = "Lote"
ORIGIN_MOVEMENT = "Movimiento"


class ProductsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductsRepository(db)

    async def get_products(self) -> List[ProductResponse]:
        return [ProductResponse(**p) for p in self.repository.get_products_with_stock()]

    async def get_product(self, product_id: int) -> ProductResponse:
        product = self.repository.get_product_with_stock(product_id)
        if not product:
            raise NotFoundError("El producto especificado no existe.")
        return ProductResponse(**product)

    def _ensure_category(self, category_id: int) -> None:
        category = self.repository.get_category(category_id)
        if not category:
            raise NotFoundError("La categoría especificada no existe.")
        if category.status != RecordStatus.ACTIVE.value:
            raise InvalidRequestError("La categoría especificada está inactiva.")

    async def create_product(self, product_data: ProductCreateRequest) -> ProductCreatedResponse:
        data = product_data.model_dump()
        self._ensure_category(data['category_id'])

        product = self.repository.create_product(data)
        logger.info(f"Producto creado: #{product.id} '{product.name}'")
        return ProductCreatedResponse(id=product.id)

    async def update_product(self, product_id: int, product_data: ProductUpdateRequest) -> MessageResponse:
        product = self.repository.get_product(product_id)
        if not product:
            raise NotFoundError("El producto especificado no existe.")

        data = product_data.model_dump()
        if data['category_id'] != product.category_id:
            self._ensure_category(data['category_id'])

        # Los lotes existentes ya registraron (o no) sus números de serie
        if bool(product.has_serial) != data['has_serial'] and self.repository.has_lots(product_id):
            raise InvalidRequestError(
                'No se puede cambiar "HasNumSerie" de un producto con lotes registrados.'
            )

        self.repository.update_product(product, data)
        logger.info(f"Producto actualizado: #{product_id}")
        return MessageResponse(message="Producto actualizado exitosamente.")

    # ==================== KARDEX ====================

    @staticmethod
    def _local_naive(value: Optional[datetime]) -> Optional[datetime]:
        # FechaMovimiento y FechaEntrada se guardan en hora local sin zona
        if value is not None and value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    @staticmethod
    def _check_range(start_date: Optional[datetime], end_date: Optional[datetime]) -> None:
        if start_date and end_date and start_date > end_date:
            raise InvalidRequestError('"startDate" no puede ser posterior a "endDate".')

    def _get_product_or_404(self, product_id: int):
        product = self.repository.get_product(product_id)
        if not product:
            raise NotFoundError("El producto especificado no existe.")
        return product

    async def get_kardex(
        self,
        product_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> List[KardexEntry]:
        """
        Kardex del producto con saldo acumulado.

        Cada lote registrado aparece como una Entrada de apertura por su
        CantidadInicial, seguido de los movimientos en orden cronológico; así el
        Saldo final coincide con la suma de CantidadActual de los lotes.
        Con startDate, el saldo de apertura incluye todo lo anterior a esa fecha.
        """
        start_date, end_date = self._local_naive(start_date), self._local_naive(end_date)
        self._check_range(start_date, end_date)
        product = self._get_product_or_404(product_id)

        opening = self.repository.get_balance_before(product_id, start_date) if start_date else 0

        entries = []
        for lot in self.repository.get_lot_entries(product_id, start_date, end_date):
            entries.append(((lot.entry_date, 0, lot.id), {
                "Origen": ORIGIN_LOT,
                "IdMovimiento": None,
                "FechaMovimiento": lot.entry_date,
                "TipoMovimiento": MovementType.ENTRADA.value,
                "Cantidad": lot.initial_quantity,
                "Notas": lot.notes,
                "NumSerie": None,
                "IdLote": lot.id,
                "IdProducto": product.id,
                "NombreProducto": product.name,
            }))

        for movement in self.repository.get_movement_entries(product_id, start_date, end_date):
            entries.append(((movement.movement_date, 1, movement.id), {
                "Origen": ORIGIN_MOVEMENT,
                "IdMovimiento": movement.id,
                "FechaMovimiento": movement.movement_date,
                "TipoMovimiento": movement.movement_type,
                "Cantidad": movement.quantity,
                "Notas": movement.notes,
                "NumSerie": movement.serial_number,
                "IdLote": movement.lot_id,
                "IdProducto": product.id,
                "NombreProducto": product.name,
            }))

        entries.sort(key=lambda item: item[0])
        rows = LedgerService.running_balance([entry for _, entry in entries], opening)
        return [KardexEntry(**row) for row in rows]

    async def get_opening_balance(self, product_id: int, start_date: datetime) -> OpeningBalanceResponse:
        self._get_product_or_404(product_id)
        start_date = self._local_naive(start_date)
        return OpeningBalanceResponse(
            saldoInicial=self.repository.get_balance_before(product_id, start_date)
        )

    async def get_daily_movements(
        self,
        product_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> List[ProductDailyMovements]:
        start_date, end_date = self._local_naive(start_date), self._local_naive(end_date)
        self._check_range(start_date, end_date)
        self._get_product_or_404(product_id)
        rows = self.repository.get_daily_movements(product_id, start_date, end_date)
        return [ProductDailyMovements(**row) for row in rows]
