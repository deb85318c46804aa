# app/shared/services/dashboard_service.py
from typing import Any, Dict, List, Optional
from datetime import date, timedelta
from sqlalchemy.orm import Session
from sqlalchemy import func

from app.config.settings import settings
from app.shared.database.models import Lot, Product, InventoryMovement
from app.shared.schemas.common import MovementType


def as_date(value) -> Optional[date]:
    """func.date devuelve str en SQLite y date en PostgreSQL"""
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class DashboardService:
    """Vistas agregadas para gráficas y notificaciones en tiempo real"""

    def __init__(self, db: Session):
        self.db = db

    def movements_per_day(self, movement_type: Optional[MovementType] = None) -> List[Dict[str, Any]]:
        """Total de unidades movidas por día, opcionalmente filtrado por tipo"""
        day = func.date(InventoryMovement.movement_date)
        query = self.db.query(
            day.label("day"),
            func.sum(InventoryMovement.quantity).label("total")
        )
        if movement_type is not None:
            query = query.filter(InventoryMovement.movement_type == movement_type.value)

        rows = query.group_by(day).order_by(day).all()
        return [
            {"FechaMovimiento": as_date(row.day), "TotalCantidad": int(row.total or 0)}
            for row in rows
        ]

    def current_lots(self) -> List[Dict[str, Any]]:
        """Listado completo de lotes con su producto"""
        rows = self.db.query(Lot, Product).join(
            Product, Lot.product_id == Product.id
        ).order_by(Lot.id).all()

        return [
            {
                "IdLote": lot.id,
                "IdProducto": product.id,
                "Nombre": product.name,
                "CantidadInicial": lot.initial_quantity,
                "CantidadActual": lot.current_quantity,
                "FechaEntrada": lot.entry_date,
                "FechaCaducidad": lot.expiry_date,
                "Notas": lot.notes,
                "IdUsuario": lot.user_id,
                "HasNumSerie": bool(product.has_serial),
            }
            for lot, product in rows
        ]

    def lots_with_expiry(self) -> List[Dict[str, Any]]:
        rows = self.db.query(Lot, Product).join(
            Product, Lot.product_id == Product.id
        ).filter(Lot.expiry_date.isnot(None)).order_by(Lot.id).all()

        return [
            {
                "IdLote": lot.id,
                "Nombre": product.name,
                "FechaEntrada": lot.entry_date,
                "FechaCaducidad": lot.expiry_date,
            }
            for lot, product in rows
        ]

    def expiring_lots(self, today: Optional[date] = None, horizon_days: Optional[int] = None) -> List[Dict[str, Any]]:
        """Lotes con existencias que caducan dentro del horizonte, el más próximo primero"""
        today = today or date.today()
        horizon_days = settings.expiry_horizon_days if horizon_days is None else horizon_days
        limit = today + timedelta(days=horizon_days)

        rows = self.db.query(Lot, Product).join(
            Product, Lot.product_id == Product.id
        ).filter(
            Lot.expiry_date.isnot(None),
            Lot.expiry_date >= today,
            Lot.expiry_date <= limit,
            Lot.current_quantity > 0
        ).order_by(Lot.expiry_date.asc(), Lot.id.asc()).all()

        return [
            {
                "IdLote": lot.id,
                "NombreProductoLote": f"{product.name} (Lote {lot.id})",
                "FechaEntrada": lot.entry_date,
                "FechaCaducidad": lot.expiry_date,
                "DiasParaVencer": (lot.expiry_date - today).days,
                "CantidadActual": lot.current_quantity,
            }
            for lot, product in rows
        ]

    def products_below_minimum(self) -> List[Dict[str, Any]]:
        """Productos cuyo stock sumado entre lotes está por debajo de StockMinimo"""
        stock = func.sum(Lot.current_quantity)
        rows = self.db.query(
            Product.id.label("product_id"),
            Product.name.label("name"),
            stock.label("stock"),
            Product.min_stock.label("min_stock")
        ).join(
            Lot, Lot.product_id == Product.id
        ).group_by(
            Product.id, Product.name, Product.min_stock
        ).having(
            stock < Product.min_stock
        ).order_by(
            (Product.min_stock - stock).desc(), Product.id
        ).all()

        return [
            {
                "IdProducto": row.product_id,
                "Nombre": row.name,
                "StockActual": int(row.stock or 0),
                "StockMinimo": row.min_stock,
                "Diferencia": row.min_stock - int(row.stock or 0),
            }
            for row in rows
        ]

    def snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        """Todas las vistas que se publican tras una mutación, por nombre de evento"""
        return {
            "movimientosxdia": self.movements_per_day(),
            "entradasxdia": self.movements_per_day(MovementType.ENTRADA),
            "salidasxdia": self.movements_per_day(MovementType.SALIDA),
            "lotesActualizados": self.current_lots(),
            "caducidadLotes": self.lots_with_expiry(),
            "productosPorVencerActualizados": self.expiring_lots(),
            "productosBajoStockMinimoActualizados": self.products_below_minimum(),
        }
