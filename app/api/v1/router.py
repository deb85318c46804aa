# app/api/v1/router.py
from fastapi import APIRouter
from app.api.v1.auth import router as auth_router
from app.modules.categories.router import router as categories_router
from app.modules.products.router import router as products_router
from app.modules.users.router import router as users_router
from app.modules.lots.router import router as lots_router
from app.modules.movements.router import router as movements_router
from app.modules.charts.router import router as charts_router
from app.modules.stock_stop.router import router as stock_stop_router


# Router principal de la API
api_router = APIRouter()

# Autenticación (login público)
api_router.include_router(auth_router)

# ==================== CATÁLOGO ====================

api_router.include_router(
    categories_router,
    tags=["Categorías"]
)

api_router.include_router(
    products_router,
    tags=["Productos"]
)

# ==================== INVENTARIO ====================

api_router.include_router(
    lots_router,
    tags=["Lotes"]
)

api_router.include_router(
    movements_router,
    tags=["Movimientos"]
)

api_router.include_router(
    stock_stop_router,
    prefix="/stock-stop",
    tags=["Parada de stock"]
)

# ==================== ADMINISTRACIÓN Y REPORTES ====================

api_router.include_router(
    users_router,
    tags=["Usuarios"]
)

api_router.include_router(
    charts_router,
    prefix="/charts",
    tags=["Gráficas"]
)
