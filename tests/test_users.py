"""
Tests for user administration.
"""


def new_user_payload(**overrides):
    payload = {
        "usuario": "jperez",
        "nombre": "Juan",
        "apellidoPaterno": "Pérez",
        "contraseña": "clave123",
        "IdRol": 3,
    }
    payload.update(overrides)
    return payload


class TestUsers:

    def test_roles(self, client, admin_headers):
        roles = client.get("/api/roles", headers=admin_headers).json()
        assert [(r["IdRol"], r["Nombre"]) for r in roles] == [
            (1, "Administrador"), (2, "Supervisor"), (3, "Operador")
        ]

    def test_create_user_and_login(self, client, admin_headers):
        response = client.post("/api/nuevoUsuario", json=new_user_payload(), headers=admin_headers)
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Usuario creado exitosamente."
        assert body["IdUsuario"]

        login = client.post("/api/login", json={"Usuario": "jperez", "Contraseña": "clave123"})
        assert login.status_code == 200
        assert login.json()["user"]["Estado"] == "Activo"

    def test_duplicate_username(self, client, admin_headers):
        client.post("/api/nuevoUsuario", json=new_user_payload(), headers=admin_headers)
        response = client.post("/api/nuevoUsuario", json=new_user_payload(), headers=admin_headers)
        assert response.status_code == 409

    def test_invalid_role(self, client, admin_headers):
        response = client.post("/api/nuevoUsuario", json=new_user_payload(IdRol=7), headers=admin_headers)
        assert response.status_code == 400
        assert "rol" in response.json()["message"]

    def test_list_hides_password(self, client, admin_headers, operator_user):
        users = client.get("/api/usuarios", headers=admin_headers).json()
        assert {u["Usuario"] for u in users} == {"admin", "operador"}
        assert all("Contrasena" not in u and "password_hash" not in u for u in users)

    def test_update_and_deactivate(self, client, admin_headers, operator_user):
        response = client.put(
            f"/api/usuarios/{operator_user.id}",
            json={"usuario": "operador", "nombre": "Olga", "apellidoPaterno": "Ruiz", "IdRol": 2, "estado": "Inactivo"},
            headers=admin_headers
        )
        assert response.status_code == 200

        detail = client.get(f"/api/usuarios/{operator_user.id}", headers=admin_headers).json()
        assert detail["IdRol"] == 2
        assert detail["Estado"] == "Inactivo"

        login = client.post("/api/login", json={"Usuario": "operador", "Contraseña": "secret123"})
        assert login.status_code == 403

    def test_update_username_taken(self, client, admin_headers, operator_user):
        response = client.put(
            f"/api/usuarios/{operator_user.id}",
            json={"usuario": "admin", "nombre": "Olga", "apellidoPaterno": "Ruiz", "IdRol": 3, "estado": "Activo"},
            headers=admin_headers
        )
        assert response.status_code == 409

    def test_update_unknown_user(self, client, admin_headers):
        response = client.put(
            "/api/usuarios/999",
            json={"usuario": "x", "nombre": "X", "apellidoPaterno": "Y", "IdRol": 3, "estado": "Activo"},
            headers=admin_headers
        )
        assert response.status_code == 404

    def test_reset_password(self, client, admin_headers, operator_user):
        response = client.post(
            "/api/restablecerPassword",
            json={"Usuario": "operador", "NuevaContraseña": "nueva456"},
            headers=admin_headers
        )
        assert response.status_code == 200

        assert client.post("/api/login", json={"Usuario": "operador", "Contraseña": "secret123"}).status_code == 401
        assert client.post("/api/login", json={"Usuario": "operador", "Contraseña": "nueva456"}).status_code == 200

    def test_reset_password_unknown_user(self, client, admin_headers):
        response = client.post(
            "/api/restablecerPassword",
            json={"Usuario": "nadie", "NuevaContraseña": "nueva456"},
            headers=admin_headers
        )
        assert response.status_code == 404

    def test_supervisor_cannot_manage_users(self, client, supervisor_headers):
        response = client.post("/api/nuevoUsuario", json=new_user_payload(), headers=supervisor_headers)
        assert response.status_code == 403
