from pydantic import BaseModel, Field, validator

from app.shared.schemas.common import RecordStatus

VALID_ROLES = (1, 2, 3)


def _not_blank(field_name: str, v: str) -> str:
    if not v or not v.strip():
        raise ValueError(f'El campo "{field_name}" debe ser una cadena de texto no vacía.')
    return v.strip()


class UserCreateRequest(BaseModel):
    """Alta de usuario; siempre queda Activo"""
    username: str = Field(..., alias="usuario", max_length=50)
    first_name: str = Field(..., alias="nombre", max_length=50)
    last_name: str = Field(..., alias="apellidoPaterno", max_length=50)
    password: str = Field(..., alias="contraseña")
    role_id: int = Field(..., alias="IdRol", description="1 Administrador, 2 Supervisor, 3 Operador")

    @validator('username')
    def validate_username(cls, v):
        return _not_blank("usuario", v)

    @validator('first_name')
    def validate_first_name(cls, v):
        return _not_blank("nombre", v)

    @validator('last_name')
    def validate_last_name(cls, v):
        return _not_blank("apellidoPaterno", v)

    @validator('password')
    def validate_password(cls, v):
        if not v or not v.strip():
            raise ValueError('El campo "contraseña" debe ser una cadena de texto no vacía.')
        return v

    @validator('role_id')
    def validate_role(cls, v):
        if v not in VALID_ROLES:
            raise ValueError('El rol especificado no es válido.')
        return v

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "usuario": "jperez",
                "nombre": "Juan",
                "apellidoPaterno": "Pérez",
                "contraseña": "secreto123",
                "IdRol": 3
            }
        }


class UserUpdateRequest(BaseModel):
    username: str = Field(..., alias="usuario", max_length=50)
    first_name: str = Field(..., alias="nombre", max_length=50)
    last_name: str = Field(..., alias="apellidoPaterno", max_length=50)
    role_id: int = Field(..., alias="IdRol")
    status: RecordStatus = Field(..., alias="estado")

    @validator('username')
    def validate_username(cls, v):
        return _not_blank("usuario", v)

    @validator('first_name')
    def validate_first_name(cls, v):
        return _not_blank("nombre", v)

    @validator('last_name')
    def validate_last_name(cls, v):
        return _not_blank("apellidoPaterno", v)

    @validator('role_id')
    def validate_role(cls, v):
        if v not in VALID_ROLES:
            raise ValueError('El rol especificado no es válido.')
        return v

    class Config:
        populate_by_name = True


class PasswordResetRequest(BaseModel):
    username: str = Field(..., alias="Usuario")
    new_password: str = Field(..., alias="NuevaContraseña")

    @validator('username', 'new_password')
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('El nombre de usuario y la nueva contraseña son obligatorios.')
        return v

    class Config:
        populate_by_name = True


class UserCreatedResponse(BaseModel):
    message: str
    id: int = Field(..., alias="IdUsuario")

    class Config:
        populate_by_name = True


class RoleResponse(BaseModel):
    id: int = Field(..., alias="IdRol")
    name: str = Field(..., alias="Nombre")

    class Config:
        from_attributes = True
        populate_by_name = True
