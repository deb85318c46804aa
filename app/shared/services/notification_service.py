# app/shared/services/notification_service.py
"""
Publicación en tiempo real de las vistas del dashboard.

Se ejecuta después del commit (BackgroundTasks), con su propia sesión. Los
errores se registran y no llegan al cliente que originó la mutación.
"""
from typing import Any, Callable, Optional, Set
from datetime import datetime
import logging

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder

from app.shared.services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Observadores suscritos al canal de eventos"""

    def __init__(self):
        self.active_connections: Set[Any] = set()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.active_connections.add(websocket)
        logger.info(f"Observador conectado ({len(self.active_connections)} activos)")

    def disconnect(self, websocket) -> None:
        self.active_connections.discard(websocket)
        logger.info(f"Observador desconectado ({len(self.active_connections)} activos)")

    @property
    def has_observers(self) -> bool:
        return bool(self.active_connections)

    async def broadcast(self, event: str, data: Any) -> None:
        """Enviar {event, data} a todos; las conexiones caídas se descartan"""
        message = {"event": event, "data": jsonable_encoder(data)}
        dead = []
        for connection in list(self.active_connections):
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.warning(f"No se pudo enviar '{event}' a un observador: {e}")
                dead.append(connection)
        for connection in dead:
            self.disconnect(connection)


class DashboardNotifier:
    """Hooks post-commit que recalculan y publican las vistas agregadas"""

    def __init__(self, manager: ConnectionManager, session_factory: Optional[Callable] = None):
        self.manager = manager
        self.session_factory = session_factory

    def _open_session(self):
        if self.session_factory is None:
            from app.config.database import SessionLocal
            self.session_factory = SessionLocal
        return self.session_factory()

    async def publish_dashboard(self) -> None:
        if not self.manager.has_observers:
            logger.debug("Sin observadores conectados, no se publica el dashboard")
            return

        try:
            db = self._open_session()
            try:
                views = DashboardService(db).snapshot()
            finally:
                db.close()

            for event, data in views.items():
                await self.manager.broadcast(event, data)
            logger.info(f"Dashboard publicado a {len(self.manager.active_connections)} observadores")
        except Exception:
            logger.exception("Error publicando actualización del dashboard")

    async def publish_stock_stop(self, active: bool) -> None:
        event = "stockStopActivated" if active else "stockStopDeactivated"
        try:
            await self.manager.broadcast(event, {"time": datetime.utcnow().isoformat()})
        except Exception:
            logger.exception(f"Error publicando '{event}'")
        await self.publish_dashboard()


connection_manager = ConnectionManager()
dashboard_notifier = DashboardNotifier(connection_manager)
