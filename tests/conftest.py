"""
Pytest configuration and fixtures for the inventory API tests.

SQLite in-memory database shared through StaticPool; `get_db` is overridden
so requests and fixtures see the same data.
"""
import os
import pytest
from typing import Generator

# Set test environment before importing app modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-only"

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.config.database import get_db
from app.core.auth.service import AuthService
from app.shared.database.models import Base, Role, User, Category, Product
from app.shared.services.notification_service import dashboard_notifier

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "secret123"
PASSWORD_HASH = AuthService.get_password_hash(TEST_PASSWORD)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db
dashboard_notifier.session_factory = TestingSessionLocal


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Fresh schema with the three system roles."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    session.add_all([
        Role(id=1, name="Administrador"),
        Role(id=2, name="Supervisor"),
        Role(id=3, name="Operador"),
    ])
    session.commit()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db) -> TestClient:
    return TestClient(app)


def _create_user(db: Session, username: str, role_id: int, status: str = "Activo") -> User:
    user = User(
        username=username,
        first_name=username.capitalize(),
        last_name="Prueba",
        password_hash=PASSWORD_HASH,
        role_id=role_id,
        status=status,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _headers_for(user: User) -> dict:
    token = AuthService.create_access_token(
        {"IdUsuario": user.id, "Usuario": user.username, "IdRol": user.role_id}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(db) -> User:
    return _create_user(db, "admin", 1)


@pytest.fixture
def supervisor_user(db) -> User:
    return _create_user(db, "supervisor", 2)


@pytest.fixture
def operator_user(db) -> User:
    return _create_user(db, "operador", 3)


@pytest.fixture
def inactive_user(db) -> User:
    return _create_user(db, "inactivo", 3, status="Inactivo")


@pytest.fixture
def admin_headers(admin_user) -> dict:
    return _headers_for(admin_user)


@pytest.fixture
def supervisor_headers(supervisor_user) -> dict:
    return _headers_for(supervisor_user)


@pytest.fixture
def operator_headers(operator_user) -> dict:
    return _headers_for(operator_user)


@pytest.fixture
def category(db) -> Category:
    category = Category(name="Medicamentos", description="General", status="Activo")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def make_product(db, category):
    """Factory for products in the default category."""
    def _make(name: str = "Paracetamol", has_serial: bool = False, min_stock: int = 0, max_stock: int = 100) -> Product:
        product = Product(
            name=name,
            description=None,
            category_id=category.id,
            min_stock=min_stock,
            max_stock=max_stock,
            has_serial=has_serial,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product
    return _make


@pytest.fixture
def register_lot(client, operator_headers):
    """Register a lot through the API and return its IdLote."""
    def _register(product_id: int, quantity: int, serial_numbers=None, **extra) -> int:
        payload = {"producto": product_id, "cantidad": quantity, **extra}
        if serial_numbers is not None:
            payload["serialNumbers"] = serial_numbers
        response = client.post("/api/lotes", json=payload, headers=operator_headers)
        assert response.status_code == 201, response.text
        return response.json()["IdLote"]
    return _register


@pytest.fixture
def session_factory(db):
    """Session factory bound to the test database, for post-commit hooks."""
    return TestingSessionLocal
