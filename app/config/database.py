# app/config/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .settings import settings

engine_kwargs = {
    "pool_pre_ping": True,
    "echo": settings.debug
}

# SQLite solo para desarrollo local
if settings.sqlalchemy_database_url.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    engine_kwargs["pool_recycle"] = 300

# Create engine
engine = create_engine(
    settings.sqlalchemy_database_url,
    **engine_kwargs
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Database dependency
def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Crear tablas que no existan"""
    from app.shared.database.models import Base
    Base.metadata.create_all(bind=engine)
