# app/modules/users/repository.py
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from app.shared.database.models import User, Role
from app.shared.schemas.common import RecordStatus


class UsersRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_roles(self) -> List[Role]:
        return self.db.query(Role).order_by(Role.id).all()

    def get_users(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_username(self, username: str, exclude_id: Optional[int] = None) -> Optional[User]:
        query = self.db.query(User).filter(User.username == username)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first()

    def create_user(self, data: Dict[str, Any], password_hash: str) -> User:
        user = User(
            username=data['username'],
            first_name=data['first_name'],
            last_name=data['last_name'],
            password_hash=password_hash,
            role_id=data['role_id'],
            status=RecordStatus.ACTIVE.value
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_user(self, user: User, data: Dict[str, Any]) -> User:
        user.username = data['username']
        user.first_name = data['first_name']
        user.last_name = data['last_name']
        user.role_id = data['role_id']
        user.status = data['status']
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_password(self, user: User, password_hash: str) -> User:
        user.password_hash = password_hash
        self.db.commit()
        return user
