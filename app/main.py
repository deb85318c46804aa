# app/main.py
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.config.settings import settings
from app.config.database import init_db
from app.core.middleware import setup_middleware, setup_exception_handlers
from app.api.v1.router import api_router
from app.api.v1.realtime import router as realtime_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"{settings.app_name} iniciando (versión {settings.version})")
    logger.info(f"Entorno: {'Development' if settings.debug else 'Production'}")
    logger.info(f"Token expira en {settings.access_token_expire_minutes} minutos")
    logger.info(
        f"Base de datos: {settings.sqlalchemy_database_url.split('@')[1] if '@' in settings.sqlalchemy_database_url else settings.sqlalchemy_database_url}"
    )

    if settings.auto_create_tables:
        init_db()
        logger.info("Tablas verificadas")

    yield

    # Shutdown
    logger.info(f"{settings.app_name} detenida")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Sistema de inventario por lotes con números de serie, kardex y tablero en tiempo real",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)
setup_exception_handlers(app)

# Include routers
app.include_router(api_router, prefix="/api")
app.include_router(realtime_router)


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": f"{settings.app_name} - Sistema de Inventario por Lotes",
        "version": settings.version,
        "status": "running",
        "environment": "production" if not settings.debug else "development",
        "docs": "/docs",
        "api": "/api"
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.version,
        "app": settings.app_name,
        "environment": "production" if not settings.debug else "development"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
