"""
Tests for lot registration.
"""
from app.shared.database.models import Lot, SerialUnit


class TestLotRegistration:

    def test_non_serialized_lot(self, client, operator_headers, operator_user, make_product):
        product = make_product()
        response = client.post(
            "/api/lotes",
            json={"producto": product.id, "cantidad": "10", "fechaCaducidad": "2030-01-31", "notas": "Compra"},
            headers=operator_headers
        )
        assert response.status_code == 201
        lot_id = response.json()["IdLote"]

        lot = client.get(f"/api/lotes/{lot_id}", headers=operator_headers).json()
        assert lot["CantidadInicial"] == 10
        assert lot["CantidadActual"] == 10
        assert lot["FechaCaducidad"] == "2030-01-31"
        assert lot["IdUsuario"] == operator_user.id
        assert lot["NombreProducto"] == "Paracetamol"

    def test_serialized_lot_creates_active_units(self, client, operator_headers, make_product):
        product = make_product("Glucómetro", has_serial=True)
        response = client.post(
            "/api/lotes",
            json={"producto": product.id, "cantidad": 2, "serialNumbers": ["A1", "A2"]},
            headers=operator_headers
        )
        assert response.status_code == 201
        lot_id = response.json()["IdLote"]

        serials = client.get(
            f"/api/lotes/{lot_id}/serial-numbers", params={"estado": "Activo"}, headers=operator_headers
        ).json()
        assert serials == [{"NumSerie": "A1"}, {"NumSerie": "A2"}]

        lot = client.get(f"/api/lotes/{lot_id}", headers=operator_headers).json()
        assert lot["CantidadActual"] == 2

    def test_serial_count_mismatch_writes_nothing(self, client, db, operator_headers, make_product):
        product = make_product("Glucómetro", has_serial=True)
        response = client.post(
            "/api/lotes",
            json={"producto": product.id, "cantidad": 3, "serialNumbers": ["A1", "A2"]},
            headers=operator_headers
        )
        assert response.status_code == 400
        assert response.json()["message"] == "La cantidad de números de serie no coincide con la cantidad ingresada."

        assert db.query(Lot).count() == 0
        assert db.query(SerialUnit).count() == 0

    def test_serialized_without_codes(self, client, operator_headers, make_product):
        product = make_product("Glucómetro", has_serial=True)
        response = client.post("/api/lotes", json={"producto": product.id, "cantidad": 1}, headers=operator_headers)
        assert response.status_code == 400

    def test_duplicate_serial_conflict(self, client, db, operator_headers, make_product, register_lot):
        product = make_product("Glucómetro", has_serial=True)
        register_lot(product.id, 1, ["A1"])

        response = client.post(
            "/api/lotes",
            json={"producto": product.id, "cantidad": 2, "serialNumbers": ["A2", "A1"]},
            headers=operator_headers
        )
        assert response.status_code == 409
        assert db.query(Lot).count() == 1
        assert db.query(SerialUnit).count() == 1

    def test_repeated_serial_in_request(self, client, operator_headers, make_product):
        product = make_product("Glucómetro", has_serial=True)
        response = client.post(
            "/api/lotes",
            json={"producto": product.id, "cantidad": 2, "serialNumbers": ["A1", "A1"]},
            headers=operator_headers
        )
        assert response.status_code == 409

    def test_unknown_product(self, client, operator_headers, db):
        response = client.post("/api/lotes", json={"producto": 999, "cantidad": 1}, headers=operator_headers)
        assert response.status_code == 404

    def test_quantity_must_be_positive(self, client, operator_headers, make_product):
        product = make_product()
        response = client.post("/api/lotes", json={"producto": product.id, "cantidad": 0}, headers=operator_headers)
        assert response.status_code == 400
        assert "cantidad" in response.json()["message"]

    def test_listing_and_unknown_lot(self, client, operator_headers, make_product, register_lot):
        product = make_product()
        register_lot(product.id, 3)
        register_lot(product.id, 4)
        lots = client.get("/api/lotes", headers=operator_headers).json()
        assert len(lots) == 2
        assert client.get("/api/lotes/999", headers=operator_headers).status_code == 404
        assert client.get("/api/lotes/999/serial-numbers", headers=operator_headers).status_code == 404
