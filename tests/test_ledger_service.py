"""
Tests for the lot accounting rules (no database).
"""
import pytest
from types import SimpleNamespace

from app.core.exceptions import InvalidRequestError, ConflictError, ForbiddenOperationError
from app.shared.schemas.common import MovementType, RecordStatus
from app.shared.services.ledger_service import LedgerService


def make_lot(initial=10, current=10, lot_id=1):
    return SimpleNamespace(id=lot_id, initial_quantity=initial, current_quantity=current)


def make_serial(lot_id=1, status="Activo"):
    return SimpleNamespace(lot_id=lot_id, status=status)


class TestStockStop:

    def test_open_stock_passes(self):
        LedgerService.ensure_stock_open(False, "movimientos")

    def test_active_stop_is_forbidden(self):
        with pytest.raises(ForbiddenOperationError) as exc:
            LedgerService.ensure_stock_open(True, "movimientos")
        assert exc.value.status_code == 403
        assert "Parada de stock" in exc.value.detail


class TestLotRegistration:

    def test_non_serialized_returns_no_codes(self):
        assert LedgerService.validate_lot_registration(False, 10, None) == []

    def test_non_serialized_rejects_codes(self):
        with pytest.raises(InvalidRequestError):
            LedgerService.validate_lot_registration(False, 1, ["X1"])

    def test_serialized_requires_codes(self):
        with pytest.raises(InvalidRequestError):
            LedgerService.validate_lot_registration(True, 2, [])

    def test_count_mismatch(self):
        with pytest.raises(InvalidRequestError) as exc:
            LedgerService.validate_lot_registration(True, 3, ["A1", "A2"])
        assert "no coincide" in exc.value.detail

    def test_repeated_codes_conflict(self):
        with pytest.raises(ConflictError) as exc:
            LedgerService.validate_lot_registration(True, 3, ["A1", "A2", "A1"])
        assert "A1" in exc.value.detail

    def test_codes_are_trimmed(self):
        assert LedgerService.validate_lot_registration(True, 2, [" A1", "A2 "]) == ["A1", "A2"]

    def test_blank_code_rejected(self):
        with pytest.raises(InvalidRequestError):
            LedgerService.validate_lot_registration(True, 2, ["A1", "  "])

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_quantity_must_be_positive(self, quantity):
        with pytest.raises(InvalidRequestError):
            LedgerService.validate_lot_registration(False, quantity, None)


class TestMovementValidation:

    def test_outbound_over_current_rejected(self):
        with pytest.raises(InvalidRequestError) as exc:
            LedgerService.validate_movement(make_lot(10, 10), False, MovementType.SALIDA, 12)
        assert "cantidad actual" in exc.value.detail

    def test_outbound_within_current(self):
        LedgerService.validate_movement(make_lot(10, 10), False, MovementType.SALIDA, 7)

    def test_return_with_nothing_dispensed(self):
        with pytest.raises(InvalidRequestError) as exc:
            LedgerService.validate_movement(make_lot(10, 10), False, MovementType.ENTRADA, 1)
        assert "No hay productos para devolver" in exc.value.detail

    def test_return_over_dispensed_rejected(self):
        # 7 salieron, quedan 3
        with pytest.raises(InvalidRequestError) as exc:
            LedgerService.validate_movement(make_lot(10, 3), False, MovementType.ENTRADA, 8)
        assert "ha salido" in exc.value.detail

    def test_return_within_dispensed(self):
        LedgerService.validate_movement(make_lot(10, 3), False, MovementType.ENTRADA, 7)

    def test_serialized_requires_code(self):
        with pytest.raises(InvalidRequestError) as exc:
            LedgerService.validate_movement(make_lot(2, 2), True, MovementType.SALIDA, 1)
        assert "número de serie" in exc.value.detail

    def test_serialized_quantity_must_be_one(self):
        with pytest.raises(InvalidRequestError) as exc:
            LedgerService.validate_movement(
                make_lot(2, 2), True, MovementType.SALIDA, 2,
                serial_number="A1", serial_unit=make_serial()
            )
        assert "debe ser 1" in exc.value.detail

    def test_serial_must_be_active_for_outbound(self):
        with pytest.raises(InvalidRequestError) as exc:
            LedgerService.validate_movement(
                make_lot(2, 1), True, MovementType.SALIDA, 1,
                serial_number="A1", serial_unit=make_serial(status="Inactivo")
            )
        assert exc.value.detail == "El número de serie no está disponible para salida."

    def test_serial_must_be_inactive_for_return(self):
        with pytest.raises(InvalidRequestError) as exc:
            LedgerService.validate_movement(
                make_lot(2, 2), True, MovementType.ENTRADA, 1,
                serial_number="A1", serial_unit=make_serial(status="Activo")
            )
        assert exc.value.detail == "El número de serie no está disponible para entrada."

    def test_serial_from_another_lot(self):
        with pytest.raises(InvalidRequestError):
            LedgerService.validate_movement(
                make_lot(2, 2, lot_id=1), True, MovementType.SALIDA, 1,
                serial_number="B1", serial_unit=make_serial(lot_id=2)
            )

    def test_unknown_serial(self):
        with pytest.raises(InvalidRequestError):
            LedgerService.validate_movement(
                make_lot(2, 2), True, MovementType.SALIDA, 1,
                serial_number="ZZ", serial_unit=None
            )


class TestApplyMovement:

    def test_outbound_decrements(self):
        assert LedgerService.apply_movement(make_lot(10, 10), MovementType.SALIDA, 7) == 3

    def test_return_increments(self):
        assert LedgerService.apply_movement(make_lot(10, 3), MovementType.ENTRADA, 2) == 5

    def test_out_of_range_raises(self):
        with pytest.raises(ValueError):
            LedgerService.apply_movement(make_lot(10, 10), MovementType.ENTRADA, 1)

    def test_serial_state_machine(self):
        assert LedgerService.next_serial_status(MovementType.SALIDA) == RecordStatus.INACTIVE
        assert LedgerService.next_serial_status(MovementType.ENTRADA) == RecordStatus.ACTIVE


class TestRunningBalance:

    def test_balance_accumulates_from_opening(self):
        entries = [
            {"TipoMovimiento": "Entrada", "Cantidad": 10},
            {"TipoMovimiento": "Salida", "Cantidad": 7},
            {"TipoMovimiento": "Entrada", "Cantidad": 2},
        ]
        rows = LedgerService.running_balance(entries, opening_balance=5)
        assert [row["Saldo"] for row in rows] == [15, 8, 10]

    def test_entries_are_not_mutated(self):
        entries = [{"TipoMovimiento": "Salida", "Cantidad": 1}]
        LedgerService.running_balance(entries)
        assert "Saldo" not in entries[0]
