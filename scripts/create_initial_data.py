"""
Script para crear tablas, roles y el primer administrador

Uso:
    ADMIN_USER=admin ADMIN_PASSWORD=passwordABC python -m scripts.create_initial_data
"""
import os

from app.config.database import SessionLocal, init_db
from app.shared.database.models import Role, User
from app.core.auth.service import AuthService

ROLES = [
    {"id": 1, "name": "Administrador"},
    {"id": 2, "name": "Supervisor"},
    {"id": 3, "name": "Operador"},
]


def create_initial_data():
    """Crear roles del sistema y un administrador si no hay usuarios"""

    init_db()
    print("✅ Tablas verificadas")

    db = SessionLocal()

    try:
        for role_data in ROLES:
            role = db.query(Role).filter(Role.id == role_data["id"]).first()
            if role is None:
                db.add(Role(id=role_data["id"], name=role_data["name"]))
                print(f"✅ Rol creado: {role_data['id']} {role_data['name']}")
        db.commit()

        existing_users = db.query(User).count()
        if existing_users > 0:
            print(f"✅ Ya existen {existing_users} usuarios en la base de datos")
            return

        username = os.getenv("ADMIN_USER", "admin")
        password = os.getenv("ADMIN_PASSWORD", "passwordABC")

        admin = User(
            username=username,
            first_name=os.getenv("ADMIN_FIRST_NAME", "Administrador"),
            last_name=os.getenv("ADMIN_LAST_NAME", "Sistema"),
            password_hash=AuthService.get_password_hash(password),
            role_id=1,
            status="Activo"
        )
        db.add(admin)
        db.commit()

        print(f"\n🎉 Administrador creado: {username} / {password}")
        print("   Cambia la contraseña con /api/restablecerPassword")

    except Exception as e:
        db.rollback()
        print(f"❌ Error creando datos iniciales: {e}")
        raise

    finally:
        db.close()


if __name__ == "__main__":
    create_initial_data()
