"""
Tests for the real-time fan-out and the WebSocket endpoint.
"""
import asyncio
import contextlib
import pytest
from starlette.websockets import WebSocketDisconnect

from app.shared.services.notification_service import (
    ConnectionManager, DashboardNotifier, connection_manager
)

DASHBOARD_EVENTS = [
    "movimientosxdia", "entradasxdia", "salidasxdia", "lotesActualizados",
    "caducidadLotes", "productosPorVencerActualizados",
    "productosBajoStockMinimoActualizados",
]


class FakeConnection:
    def __init__(self, fail=False):
        self.fail = fail
        self.messages = []

    async def accept(self):
        pass

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError("connection closed")
        self.messages.append(message)


@pytest.fixture
def observer():
    """Fake connection subscribed to the application-wide manager."""
    connection = FakeConnection()
    connection_manager.active_connections.add(connection)
    try:
        yield connection
    finally:
        connection_manager.disconnect(connection)


class TestConnectionManager:

    def test_broadcast_reaches_every_observer(self):
        manager = ConnectionManager()
        first, second = FakeConnection(), FakeConnection()
        asyncio.run(manager.connect(first))
        asyncio.run(manager.connect(second))

        asyncio.run(manager.broadcast("lotesActualizados", [{"IdLote": 1}]))

        assert first.messages == [{"event": "lotesActualizados", "data": [{"IdLote": 1}]}]
        assert second.messages == first.messages

    def test_dead_connection_is_dropped(self):
        manager = ConnectionManager()
        alive, dead = FakeConnection(), FakeConnection(fail=True)
        manager.active_connections.update({alive, dead})

        asyncio.run(manager.broadcast("movimientosxdia", []))

        assert manager.active_connections == {alive}
        assert len(alive.messages) == 1


class TestDashboardNotifier:

    def test_publishes_all_views(self, session_factory):
        manager = ConnectionManager()
        connection = FakeConnection()
        manager.active_connections.add(connection)
        notifier = DashboardNotifier(manager, session_factory=session_factory)

        asyncio.run(notifier.publish_dashboard())

        assert [m["event"] for m in connection.messages] == DASHBOARD_EVENTS

    def test_skipped_without_observers(self):
        def no_session():
            raise AssertionError("no debe abrir sesión sin observadores")

        notifier = DashboardNotifier(ConnectionManager(), session_factory=no_session)
        asyncio.run(notifier.publish_dashboard())

    def test_failures_are_swallowed(self):
        def broken_session():
            raise RuntimeError("base de datos no disponible")

        manager = ConnectionManager()
        connection = FakeConnection()
        manager.active_connections.add(connection)
        notifier = DashboardNotifier(manager, session_factory=broken_session)

        asyncio.run(notifier.publish_dashboard())
        assert connection.messages == []

    def test_stock_stop_event_precedes_dashboard(self, session_factory):
        manager = ConnectionManager()
        connection = FakeConnection()
        manager.active_connections.add(connection)
        notifier = DashboardNotifier(manager, session_factory=session_factory)

        asyncio.run(notifier.publish_stock_stop(True))

        assert connection.messages[0]["event"] == "stockStopActivated"
        assert "time" in connection.messages[0]["data"]
        assert [m["event"] for m in connection.messages[1:]] == DASHBOARD_EVENTS


class TestPostCommitHooks:

    def test_movement_publishes_updated_lots(self, client, operator_headers, make_product, register_lot, observer):
        product = make_product()
        lot_id = register_lot(product.id, 10)
        observer.messages.clear()

        response = client.post(
            "/api/movimientos",
            json={"IdLote": lot_id, "TipoMovimiento": "Salida", "Cantidad": 4},
            headers=operator_headers
        )
        assert response.status_code == 201

        events = {m["event"]: m["data"] for m in observer.messages}
        assert set(events) == set(DASHBOARD_EVENTS)
        assert events["lotesActualizados"][0]["CantidadActual"] == 6
        assert events["salidasxdia"][0]["TotalCantidad"] == 4

    def test_rejected_movement_publishes_nothing(self, client, operator_headers, make_product, register_lot, observer):
        product = make_product()
        lot_id = register_lot(product.id, 1)
        observer.messages.clear()

        response = client.post(
            "/api/movimientos",
            json={"IdLote": lot_id, "TipoMovimiento": "Salida", "Cantidad": 2},
            headers=operator_headers
        )
        assert response.status_code == 400
        assert observer.messages == []

    def test_stock_stop_toggle_notifies(self, client, supervisor_headers, observer):
        client.post("/api/stock-stop/activate", headers=supervisor_headers)
        assert observer.messages[0]["event"] == "stockStopActivated"

        observer.messages.clear()
        client.post("/api/stock-stop/deactivate", headers=supervisor_headers)
        assert observer.messages[0]["event"] == "stockStopDeactivated"


class TestWebSocketHandshake:

    def test_missing_token_is_rejected(self, client):
        with pytest.raises(WebSocketDisconnect) as exc:
            with client.websocket_connect("/ws/dashboard"):
                pass
        assert exc.value.code == 1008

    def test_invalid_token_is_rejected(self, client):
        with pytest.raises(WebSocketDisconnect) as exc:
            with client.websocket_connect("/ws/dashboard?token=basura"):
                pass
        assert exc.value.code == 1008

    def test_valid_token_is_accepted(self, client, operator_headers):
        token = operator_headers["Authorization"].split(" ", 1)[1]
        with client.websocket_connect(f"/ws/dashboard?token={token}") as websocket:
            websocket.send_text("ping")

    def test_token_in_authorization_header(self, client, operator_headers):
        with client.websocket_connect("/ws/dashboard", headers=operator_headers) as websocket:
            websocket.send_text("ping")

    def test_closed_socket_leaves_the_manager(self, client, operator_headers):
        before = set(connection_manager.active_connections)
        with client.websocket_connect("/ws/dashboard", headers=operator_headers) as websocket:
            websocket.send_text("ping")
        assert connection_manager.active_connections == before

    def test_unexpected_frame_leaves_the_manager(self, client, operator_headers):
        before = set(connection_manager.active_connections)
        # Un frame binario hace fallar receive_text en el servidor
        with contextlib.suppress(Exception):
            with client.websocket_connect("/ws/dashboard", headers=operator_headers) as websocket:
                websocket.send_bytes(b"\x00\x01")
        assert connection_manager.active_connections == before
