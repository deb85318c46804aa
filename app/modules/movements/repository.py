# app/modules/movements/repository.py
from sqlalchemy.orm import Session
from fastapi import HTTPException
from typing import Any, Dict, List
import logging

from app.core.exceptions import NotFoundError, ConflictError
from app.shared.database.models import Lot, Product, SerialUnit, InventoryMovement, User
from app.shared.schemas.common import MovementType
from app.shared.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

STALE_STATE_MESSAGE = "El lote cambió durante el registro del movimiento. Intente de nuevo."


class MovementsRepository:
    def __init__(self, db: Session):
        self.db = db
        self.ledger = LedgerService()

    def get_movements(self) -> List[Dict[str, Any]]:
        rows = self.db.query(InventoryMovement, Lot, Product, User.username).join(
            Lot, Lot.id == InventoryMovement.lot_id
        ).join(
            Product, Product.id == Lot.product_id
        ).outerjoin(
            User, User.id == InventoryMovement.user_id
        ).order_by(
            InventoryMovement.movement_date.desc(), InventoryMovement.id.desc()
        ).all()

        return [
            {
                "id": movement.id,
                "lot_id": lot.id,
                "product_id": product.id,
                "product_name": product.name,
                "movement_type": movement.movement_type,
                "quantity": movement.quantity,
                "notes": movement.notes,
                "serial_number": movement.serial_number,
                "movement_date": movement.movement_date,
                "user_id": movement.user_id,
                "username": username,
            }
            for movement, lot, product, username in rows
        ]

    def create_movement_atomic(self, movement_data: Dict[str, Any], user_id: int) -> InventoryMovement:
        """
        Registrar movimiento y actualizar lote y número de serie en una transacción.

        Proceso:
        1. Bloquear el lote (SELECT FOR UPDATE)
        2. Bloquear el número de serie, si el producto lo maneja
        3. Validar contra el estado bloqueado
        4. Insertar MovimientosInventario
        5. Cambiar Estado del número de serie
        6. Actualizar CantidadActual del lote (UPDATE condicionado)
        7. Commit único

        Raises:
            NotFoundError: lote inexistente
            InvalidRequestError: el movimiento dejaría el lote inconsistente
            ConflictError: otra transacción modificó el lote o el número de serie
        """
        movement_type: MovementType = movement_data['movement_type']
        quantity = movement_data['quantity']
        serial_number = movement_data.get('serial_number')

        try:
            # PASO 1: BLOQUEAR LOTE
            row = self.db.query(Lot, Product.has_serial).join(
                Product, Product.id == Lot.product_id
            ).filter(
                Lot.id == movement_data['lot_id']
            ).with_for_update(of=Lot).first()

            if row is None:
                raise NotFoundError("El lote especificado no existe.")

            lot, has_serial = row
            has_serial = bool(has_serial)

            # PASO 2: BLOQUEAR NÚMERO DE SERIE
            serial_unit = None
            if has_serial and serial_number:
                serial_unit = self.db.query(SerialUnit).filter(
                    SerialUnit.serial_number == serial_number
                ).with_for_update().first()

            # PASO 3: VALIDAR
            self.ledger.validate_movement(
                lot, has_serial, movement_type, quantity,
                serial_number=serial_number, serial_unit=serial_unit
            )

            # PASO 4: CREAR MOVIMIENTO
            movement = InventoryMovement(
                lot_id=lot.id,
                movement_type=movement_type.value,
                quantity=quantity,
                notes=movement_data.get('notes'),
                user_id=user_id,
                serial_number=serial_number if has_serial else None
            )
            self.db.add(movement)
            self.db.flush()  # Obtener movement.id

            # PASO 5: ESTADO DEL NÚMERO DE SERIE
            # Updates condicionados: SQLite ignora FOR UPDATE
            if serial_unit is not None:
                flipped = self.db.query(SerialUnit).filter(
                    SerialUnit.id == serial_unit.id,
                    SerialUnit.status == serial_unit.status
                ).update(
                    {SerialUnit.status: self.ledger.next_serial_status(movement_type).value},
                    synchronize_session=False
                )
                if flipped != 1:
                    raise ConflictError(STALE_STATE_MESSAGE)

            # PASO 6: CANTIDAD ACTUAL DEL LOTE
            self.ledger.apply_movement(lot, movement_type, quantity)
            if movement_type == MovementType.SALIDA:
                guard = Lot.current_quantity >= quantity
                new_quantity = Lot.current_quantity - quantity
            else:
                guard = Lot.current_quantity + quantity <= Lot.initial_quantity
                new_quantity = Lot.current_quantity + quantity

            updated = self.db.query(Lot).filter(
                Lot.id == lot.id, guard
            ).update({Lot.current_quantity: new_quantity}, synchronize_session=False)
            if updated != 1:
                raise ConflictError(STALE_STATE_MESSAGE)

            # PASO 7: COMMIT ÚNICO
            self.db.commit()
            self.db.refresh(movement)
            self.db.refresh(lot)
            logger.info(
                f"Transacción completada - Movimiento #{movement.id} "
                f"({movement_type.value} {quantity}, lote #{lot.id} → {lot.current_quantity})"
            )
            return movement

        except HTTPException as e:
            logger.warning(f"Movimiento rechazado: {e.detail}")
            self.db.rollback()
            raise
        except Exception:
            logger.exception("Error en transacción de movimiento")
            self.db.rollback()
            raise
