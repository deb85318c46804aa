# app/shared/services/ledger_service.py
"""
Reglas de consistencia entre lotes, números de serie y movimientos.

Invariantes:
- CantidadActual = CantidadInicial + Σ Entradas − Σ Salidas, siempre en [0, CantidadInicial].
- El Estado de un número de serie refleja el último movimiento que lo referencia:
  Activo (en stock) → Inactivo en Salida, Inactivo → Activo en Entrada.
- Una Entrada es la devolución de producto que ya salió del lote; el
  reabastecimiento se registra como un lote nuevo.

No hace I/O: el repository bloquea y lee el estado persistido, llama a estas
reglas y escribe el resultado en la misma transacción.
"""
from typing import Iterable, List, Optional, Dict, Any

from app.core.exceptions import InvalidRequestError, ConflictError, ForbiddenOperationError
from app.shared.schemas.common import MovementType, RecordStatus


class LedgerService:
    """Reglas de contabilidad de stock por lote"""

    @staticmethod
    def ensure_stock_open(stock_stop_active: bool, operation: str) -> None:
        """Rechazar registros mientras la Parada de stock está activa"""
        if stock_stop_active:
            raise ForbiddenOperationError(
                f"No se pueden registrar {operation} mientras la Parada de stock está activa."
            )

    @staticmethod
    def validate_lot_registration(
        has_serial: bool,
        quantity: int,
        serial_numbers: Optional[List[str]]
    ) -> List[str]:
        """
        Validar un lote antes de cualquier escritura.

        Returns:
            Lista normalizada de números de serie (vacía si el producto no los maneja)

        Raises:
            InvalidRequestError: cantidad inválida o número de series distinto a la cantidad
            ConflictError: números de serie repetidos dentro de la solicitud
        """
        if quantity is None or quantity <= 0:
            raise InvalidRequestError("La cantidad debe ser un número entero positivo.")

        codes = [code.strip() for code in (serial_numbers or [])]

        if not has_serial:
            if codes:
                raise InvalidRequestError("El producto especificado no maneja números de serie.")
            return []

        if not codes:
            raise InvalidRequestError("Debe proporcionar los números de serie para este producto.")

        if any(not code for code in codes):
            raise InvalidRequestError("Los números de serie no pueden estar vacíos.")

        if len(codes) != quantity:
            raise InvalidRequestError(
                "La cantidad de números de serie no coincide con la cantidad ingresada."
            )

        seen = set()
        repeated = []
        for code in codes:
            if code in seen and code not in repeated:
                repeated.append(code)
            seen.add(code)
        if repeated:
            raise ConflictError(
                f"Números de serie repetidos en la solicitud: {', '.join(repeated)}"
            )

        return codes

    @staticmethod
    def expected_serial_status(movement_type: MovementType) -> RecordStatus:
        """Estado que debe tener el número de serie antes del movimiento"""
        if movement_type == MovementType.SALIDA:
            return RecordStatus.ACTIVE
        return RecordStatus.INACTIVE

    @staticmethod
    def next_serial_status(movement_type: MovementType) -> RecordStatus:
        """Estado del número de serie después del movimiento"""
        if movement_type == MovementType.SALIDA:
            return RecordStatus.INACTIVE
        return RecordStatus.ACTIVE

    @staticmethod
    def validate_movement(
        lot,
        has_serial: bool,
        movement_type: MovementType,
        quantity: int,
        serial_number: Optional[str] = None,
        serial_unit=None
    ) -> None:
        """
        Validar un movimiento contra el estado actual (ya bloqueado) del lote.

        Args:
            lot: objeto con id, initial_quantity y current_quantity
            has_serial: el producto del lote maneja números de serie
            movement_type: Entrada o Salida
            quantity: cantidad solicitada (> 0)
            serial_number: código recibido (obligatorio si has_serial)
            serial_unit: unidad encontrada para ese código, o None

        Raises:
            InvalidRequestError: si el movimiento dejaría el lote inconsistente
        """
        if quantity is None or quantity <= 0:
            raise InvalidRequestError("La cantidad debe ser un número entero positivo.")

        if has_serial:
            if not serial_number:
                raise InvalidRequestError("Debe proporcionar el número de serie para este producto.")

            if quantity != 1:
                raise InvalidRequestError("La cantidad para productos con número de serie debe ser 1.")

            expected = LedgerService.expected_serial_status(movement_type)
            if (
                serial_unit is None
                or serial_unit.lot_id != lot.id
                or serial_unit.status != expected.value
            ):
                raise InvalidRequestError(
                    f"El número de serie no está disponible para {movement_type.value.lower()}."
                )
            return

        if movement_type == MovementType.SALIDA:
            if quantity > lot.current_quantity:
                raise InvalidRequestError(
                    "La cantidad no puede ser mayor que la cantidad actual del lote."
                )
        else:
            dispensed = lot.initial_quantity - lot.current_quantity
            if dispensed <= 0:
                raise InvalidRequestError("No hay productos para devolver en este lote.")
            if quantity > dispensed:
                raise InvalidRequestError(
                    "La cantidad no puede ser mayor que la cantidad que ha salido del lote."
                )

    @staticmethod
    def apply_movement(lot, movement_type: MovementType, quantity: int) -> int:
        """Calcular la nueva CantidadActual del lote"""
        delta = quantity if movement_type == MovementType.ENTRADA else -quantity
        new_quantity = lot.current_quantity + delta

        if new_quantity < 0 or new_quantity > lot.initial_quantity:
            # validate_movement ya lo impide; llegar aquí es un error de programación
            raise ValueError(
                f"Lote {lot.id}: cantidad actual fuera de rango ({new_quantity} de {lot.initial_quantity})"
            )
        return new_quantity

    @staticmethod
    def signed_quantity(movement_type: str, quantity: int) -> int:
        if movement_type == MovementType.ENTRADA.value:
            return quantity
        if movement_type == MovementType.SALIDA.value:
            return -quantity
        return 0

    @staticmethod
    def running_balance(
        entries: Iterable[Dict[str, Any]],
        opening_balance: int = 0
    ) -> List[Dict[str, Any]]:
        """
        Agregar Saldo acumulado a entradas de kardex ya ordenadas.

        Cada entrada debe traer 'TipoMovimiento' y 'Cantidad'.
        """
        balance = opening_balance
        rows = []
        for entry in entries:
            balance += LedgerService.signed_quantity(entry["TipoMovimiento"], entry["Cantidad"])
            rows.append({**entry, "Saldo": balance})
        return rows
