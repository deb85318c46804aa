from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from app.config.database import get_db
from app.core.auth.service import AuthService
from app.core.auth.schemas import UserLogin, TokenResponse, UserResponse, TokenPayload
from app.core.auth.dependencies import get_current_user, AuthenticationError, AuthorizationError
from app.shared.database.models import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["authentication"])


@router.post("/login", response_model=TokenResponse)
async def login(
    user_login: UserLogin,
    db: Session = Depends(get_db)
):
    """
    Endpoint de login para obtener token de acceso

    **Body:**
    ```json
        {
            "Usuario": "admin",
            "Contraseña": "passwordABC"
        }
    ```
    """
    user = db.query(User).filter(User.username == user_login.username).first()

    if not user or not AuthService.verify_password(user_login.password, user.password_hash):
        logger.warning(f"Login fallido para '{user_login.username}'")
        raise AuthenticationError("Credenciales inválidas.")

    # Verificar que el usuario esté activo
    if not user.is_active:
        logger.warning(f"Login rechazado, usuario inactivo: '{user.username}'")
        raise AuthorizationError("Acceso denegado, usuario inactivo.")

    token_data = TokenPayload(
        IdUsuario=user.id,
        Usuario=user.username,
        IdRol=user.role_id
    ).model_dump(exclude_none=True)

    access_token = AuthService.create_access_token(data=token_data)
    logger.info(f"Login exitoso: '{user.username}' (rol {user.role_id})")

    return TokenResponse(
        token=access_token,
        user=UserResponse.model_validate(user)
    )


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    Obtener información del usuario actual
    **Headers requeridos:**
    - Authorization: Bearer {token}
    """
    return current_user
