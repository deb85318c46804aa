# app/modules/categories/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import Any, Dict, List, Optional

from app.shared.database.models import Category
from app.shared.schemas.common import RecordStatus


class CategoriesRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_active_categories(self) -> List[Category]:
        return self.db.query(Category).filter(
            Category.status == RecordStatus.ACTIVE.value
        ).order_by(Category.name).all()

    def get_all_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.id).all()

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def find_active_by_name(self, name: str, exclude_id: Optional[int] = None) -> Optional[Category]:
        """Buscar categoría activa con el mismo nombre (sin distinguir mayúsculas)"""
        query = self.db.query(Category).filter(
            func.lower(Category.name) == name.lower(),
            Category.status == RecordStatus.ACTIVE.value
        )
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        return query.first()

    def create_category(self, data: Dict[str, Any]) -> Category:
        category = Category(
            name=data['name'],
            description=data.get('description'),
            status=RecordStatus.ACTIVE.value
        )
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def update_category(self, category: Category, data: Dict[str, Any]) -> Category:
        category.name = data['name']
        category.description = data.get('description')
        if data.get('status'):
            category.status = data['status']
        self.db.commit()
        self.db.refresh(category)
        return category

    def deactivate_category(self, category: Category) -> Category:
        category.status = RecordStatus.INACTIVE.value
        self.db.commit()
        self.db.refresh(category)
        return category
