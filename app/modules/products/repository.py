# app/modules/products/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import func, case
from typing import Any, Dict, List, Optional
from datetime import datetime

from app.shared.database.models import Product, Category, Lot, InventoryMovement
from app.shared.schemas.common import MovementType
from app.shared.services.dashboard_service import as_date


class ProductsRepository:
    def __init__(self, db: Session):
        self.db = db

    # ==================== CATÁLOGO ====================

    def _stock_subquery(self):
        return self.db.query(
            Lot.product_id.label("product_id"),
            func.sum(Lot.current_quantity).label("stock")
        ).group_by(Lot.product_id).subquery()

    def _with_stock(self):
        stock = self._stock_subquery()
        return self.db.query(
            Product,
            Category.name.label("category_name"),
            func.coalesce(stock.c.stock, 0).label("stock")
        ).outerjoin(
            Category, Category.id == Product.category_id
        ).outerjoin(
            stock, stock.c.product_id == Product.id
        )

    @staticmethod
    def _to_dict(product: Product, category_name: Optional[str], stock) -> Dict[str, Any]:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "category_id": product.category_id,
            "category_name": category_name,
            "min_stock": product.min_stock,
            "max_stock": product.max_stock,
            "has_serial": bool(product.has_serial),
            "current_stock": int(stock or 0),
        }

    def get_products_with_stock(self) -> List[Dict[str, Any]]:
        rows = self._with_stock().order_by(Product.id).all()
        return [self._to_dict(p, category_name, stock) for p, category_name, stock in rows]

    def get_product_with_stock(self, product_id: int) -> Optional[Dict[str, Any]]:
        row = self._with_stock().filter(Product.id == product_id).first()
        if row is None:
            return None
        product, category_name, stock = row
        return self._to_dict(product, category_name, stock)

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def has_lots(self, product_id: int) -> bool:
        return self.db.query(Lot.id).filter(Lot.product_id == product_id).first() is not None

    def create_product(self, data: Dict[str, Any]) -> Product:
        product = Product(
            name=data['name'],
            description=data.get('description'),
            category_id=data['category_id'],
            min_stock=data['min_stock'],
            max_stock=data['max_stock'],
            has_serial=data['has_serial']
        )
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product: Product, data: Dict[str, Any]) -> Product:
        for field in ('name', 'description', 'category_id', 'min_stock', 'max_stock', 'has_serial'):
            setattr(product, field, data.get(field))
        self.db.commit()
        self.db.refresh(product)
        return product

    # ==================== KARDEX ====================

    def get_lot_entries(
        self,
        product_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> List[Lot]:
        query = self.db.query(Lot).filter(Lot.product_id == product_id)
        if start_date:
            query = query.filter(Lot.entry_date >= start_date)
        if end_date:
            query = query.filter(Lot.entry_date <= end_date)
        return query.order_by(Lot.entry_date, Lot.id).all()

    def get_movement_entries(
        self,
        product_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> List[InventoryMovement]:
        query = self.db.query(InventoryMovement).join(
            Lot, Lot.id == InventoryMovement.lot_id
        ).filter(Lot.product_id == product_id)
        if start_date:
            query = query.filter(InventoryMovement.movement_date >= start_date)
        if end_date:
            query = query.filter(InventoryMovement.movement_date <= end_date)
        return query.order_by(InventoryMovement.movement_date, InventoryMovement.id).all()

    def get_balance_before(self, product_id: int, start_date: datetime) -> int:
        """Unidades registradas en lotes más movimientos netos antes de la fecha"""
        registered = self.db.query(
            func.coalesce(func.sum(Lot.initial_quantity), 0)
        ).filter(
            Lot.product_id == product_id,
            Lot.entry_date < start_date
        ).scalar()

        signed = case(
            (InventoryMovement.movement_type == MovementType.ENTRADA.value, InventoryMovement.quantity),
            (InventoryMovement.movement_type == MovementType.SALIDA.value, -InventoryMovement.quantity),
            else_=0
        )
        net = self.db.query(
            func.coalesce(func.sum(signed), 0)
        ).select_from(
            InventoryMovement
        ).join(
            Lot, Lot.id == InventoryMovement.lot_id
        ).filter(
            Lot.product_id == product_id,
            InventoryMovement.movement_date < start_date
        ).scalar()

        return int(registered or 0) + int(net or 0)

    def get_daily_movements(
        self,
        product_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        day = func.date(InventoryMovement.movement_date)
        inbound = func.sum(case(
            (InventoryMovement.movement_type == MovementType.ENTRADA.value, InventoryMovement.quantity),
            else_=0
        ))
        outbound = func.sum(case(
            (InventoryMovement.movement_type == MovementType.SALIDA.value, InventoryMovement.quantity),
            else_=0
        ))

        query = self.db.query(
            day.label("day"), inbound.label("inbound"), outbound.label("outbound")
        ).select_from(
            InventoryMovement
        ).join(
            Lot, Lot.id == InventoryMovement.lot_id
        ).filter(Lot.product_id == product_id)

        if start_date:
            query = query.filter(InventoryMovement.movement_date >= start_date)
        if end_date:
            query = query.filter(InventoryMovement.movement_date <= end_date)

        rows = query.group_by(day).order_by(day).all()
        return [
            {
                "movement_date": as_date(row.day),
                "inbound": int(row.inbound or 0),
                "outbound": int(row.outbound or 0),
            }
            for row in rows
        ]
