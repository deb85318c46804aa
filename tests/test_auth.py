"""
Tests for login and role-based access.
"""
from datetime import timedelta

from app.core.auth.service import AuthService

TEST_PASSWORD = "secret123"


class TestLogin:

    def test_login_returns_token_with_role(self, client, admin_user):
        response = client.post("/api/login", json={"Usuario": "admin", "Contraseña": TEST_PASSWORD})

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["Usuario"] == "admin"
        assert body["user"]["IdRol"] == 1
        assert "Contrasena" not in body["user"]

        payload = AuthService.verify_token(body["token"])
        assert payload["IdUsuario"] == admin_user.id
        assert payload["IdRol"] == 1
        assert "exp" in payload

    def test_wrong_password(self, client, admin_user):
        response = client.post("/api/login", json={"Usuario": "admin", "Contraseña": "otra"})
        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Credenciales inválidas."
        assert body["error_code"] == "unauthenticated"

    def test_unknown_user(self, client, db):
        response = client.post("/api/login", json={"Usuario": "nadie", "Contraseña": "x"})
        assert response.status_code == 401

    def test_inactive_user_is_forbidden(self, client, inactive_user):
        response = client.post("/api/login", json={"Usuario": "inactivo", "Contraseña": TEST_PASSWORD})
        assert response.status_code == 403
        assert response.json()["message"] == "Acceso denegado, usuario inactivo."

    def test_missing_field(self, client, db):
        response = client.post("/api/login", json={"Usuario": "admin"})
        assert response.status_code == 400
        assert "Contraseña" in response.json()["message"]


class TestTokenChecks:

    def test_missing_token(self, client, db):
        response = client.get("/api/productos")
        assert response.status_code == 401

    def test_invalid_token(self, client, db):
        response = client.get("/api/productos", headers={"Authorization": "Bearer basura"})
        assert response.status_code == 401

    def test_expired_token(self, client, admin_user):
        token = AuthService.create_access_token(
            {"IdUsuario": admin_user.id, "Usuario": "admin", "IdRol": 1},
            expires_delta=timedelta(minutes=-1)
        )
        response = client.get("/api/productos", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_role_not_allowed(self, client, operator_headers):
        response = client.get("/api/usuarios", headers=operator_headers)
        assert response.status_code == 403
        assert response.json()["error_code"] == "forbidden"

    def test_deactivated_user_token_rejected(self, client, db, operator_user, operator_headers):
        operator_user.status = "Inactivo"
        db.commit()
        response = client.get("/api/productos", headers=operator_headers)
        assert response.status_code == 401

    def test_me(self, client, supervisor_headers):
        response = client.get("/api/me", headers=supervisor_headers)
        assert response.status_code == 200
        assert response.json()["Usuario"] == "supervisor"
