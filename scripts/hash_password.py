"""
Genera el hash bcrypt de una contraseña, para cargar usuarios a mano

Uso:
    python -m scripts.hash_password passwordABC
"""
import sys

from app.core.auth.service import AuthService


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print("Uso: python -m scripts.hash_password <contraseña>")
        return 1

    print(f"Hash generado: {AuthService.get_password_hash(argv[0])}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
