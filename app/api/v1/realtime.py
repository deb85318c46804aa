from fastapi import APIRouter, WebSocket, WebSocketDisconnect, HTTPException, status
import logging

from app.core.auth.dependencies import decode_role_token
from app.shared.services.notification_service import connection_manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


def _extract_token(websocket: WebSocket):
    token = websocket.query_params.get("token")
    if token:
        return token

    authorization = websocket.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


@router.websocket("/ws/dashboard")
async def dashboard_updates(websocket: WebSocket):
    """
    Canal de eventos del tablero

    Token en `?token=` o en el header `Authorization: Bearer {token}`.
    Eventos: movimientosxdia, entradasxdia, salidasxdia, lotesActualizados,
    caducidadLotes, productosPorVencerActualizados,
    productosBajoStockMinimoActualizados, stockStopActivated, stockStopDeactivated
    """
    try:
        payload = decode_role_token(_extract_token(websocket))
    except HTTPException as e:
        logger.warning(f"Conexión en tiempo real rechazada: {e.detail}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await connection_manager.connect(websocket)
    logger.info(f"Usuario {payload['IdUsuario']} suscrito al tablero")
    try:
        while True:
            # Los clientes solo escuchan; se descartan los mensajes entrantes
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info(f"Usuario {payload['IdUsuario']} desconectado del tablero")
    finally:
        connection_manager.disconnect(websocket)
