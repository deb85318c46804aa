# app/modules/lots/repository.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging

from app.core.exceptions import ConflictError
from app.shared.database.models import Lot, Product, SerialUnit, User
from app.shared.schemas.common import RecordStatus

logger = logging.getLogger(__name__)


class LotsRepository:
    def __init__(self, db: Session):
        self.db = db

    def _lots_query(self):
        return self.db.query(Lot, Product, User.username).join(
            Product, Product.id == Lot.product_id
        ).outerjoin(
            User, User.id == Lot.user_id
        )

    @staticmethod
    def _to_dict(lot: Lot, product: Product, username: Optional[str]) -> Dict[str, Any]:
        return {
            "id": lot.id,
            "product_id": product.id,
            "product_name": product.name,
            "has_serial": bool(product.has_serial),
            "entry_date": lot.entry_date,
            "expiry_date": lot.expiry_date,
            "initial_quantity": lot.initial_quantity,
            "current_quantity": lot.current_quantity,
            "notes": lot.notes,
            "user_id": lot.user_id,
            "username": username,
        }

    def get_lots(self) -> List[Dict[str, Any]]:
        rows = self._lots_query().order_by(Lot.id.desc()).all()
        return [self._to_dict(*row) for row in rows]

    def get_lot(self, lot_id: int) -> Optional[Dict[str, Any]]:
        row = self._lots_query().filter(Lot.id == lot_id).first()
        return self._to_dict(*row) if row else None

    def lot_exists(self, lot_id: int) -> bool:
        return self.db.query(Lot.id).filter(Lot.id == lot_id).first() is not None

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_serial_numbers(self, lot_id: int, status: Optional[str] = None) -> List[SerialUnit]:
        query = self.db.query(SerialUnit).filter(SerialUnit.lot_id == lot_id)
        if status:
            query = query.filter(SerialUnit.status == status)
        return query.order_by(SerialUnit.id).all()

    def find_existing_serials(self, codes: List[str]) -> List[str]:
        if not codes:
            return []
        rows = self.db.query(SerialUnit.serial_number).filter(
            SerialUnit.serial_number.in_(codes)
        ).all()
        return [row[0] for row in rows]

    def create_lot_atomic(
        self,
        lot_data: Dict[str, Any],
        product: Product,
        serial_codes: List[str],
        user_id: int
    ) -> Lot:
        """
        Registrar lote y sus números de serie en una sola transacción.

        Proceso:
        1. Insertar Lote con CantidadActual = CantidadInicial
        2. Insertar DetalleProducto (Activo) por cada número de serie
        3. Commit único

        Raises:
            ConflictError: si algún número de serie ya existe
        """
        try:
            # PASO 1: CREAR LOTE
            lot = Lot(
                product_id=product.id,
                expiry_date=lot_data.get('expiry_date'),
                entry_date=lot_data.get('entry_date') or datetime.now(),
                initial_quantity=lot_data['quantity'],
                current_quantity=lot_data['quantity'],
                notes=lot_data.get('notes'),
                user_id=user_id
            )
            self.db.add(lot)
            self.db.flush()  # Obtener lot.id

            # PASO 2: NÚMEROS DE SERIE
            if serial_codes:
                self.db.add_all([
                    SerialUnit(
                        lot_id=lot.id,
                        product_id=product.id,
                        serial_number=code,
                        status=RecordStatus.ACTIVE.value
                    )
                    for code in serial_codes
                ])
                self.db.flush()
                logger.info(f"{len(serial_codes)} números de serie agregados al lote #{lot.id}")

            # PASO 3: COMMIT ÚNICO
            self.db.commit()
            self.db.refresh(lot)
            logger.info(f"Transacción completada - Lote #{lot.id}")
            return lot

        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Números de serie duplicados al registrar lote del producto #{product.id}")
            raise ConflictError("Uno o más números de serie ya existen en el sistema.")
        except HTTPException as e:
            logger.error(f"Error de negocio: {e.detail}")
            self.db.rollback()
            raise
        except Exception:
            logger.exception("Error en transacción de lote")
            self.db.rollback()
            raise
