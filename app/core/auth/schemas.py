from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime


class UserLogin(BaseModel):
    """Schema para login de usuario"""
    username: str = Field(..., alias="Usuario", description="Nombre de usuario")
    password: str = Field(..., alias="Contraseña", description="Contraseña del usuario")

    @validator('username', 'password')
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('El nombre de usuario y la contraseña son obligatorios.')
        return v

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "Usuario": "admin",
                "Contraseña": "passwordABC"
            }
        }


class UserResponse(BaseModel):
    """Schema para respuesta de usuario"""
    id: int = Field(..., alias="IdUsuario")
    username: str = Field(..., alias="Usuario")
    first_name: str = Field(..., alias="Nombre")
    last_name: str = Field(..., alias="ApellidoPaterno")
    role_id: int = Field(..., alias="IdRol")
    status: str = Field(..., alias="Estado")

    class Config:
        from_attributes = True
        populate_by_name = True


class TokenResponse(BaseModel):
    """Schema para respuesta de token"""
    token: str
    token_type: str = "bearer"
    user: UserResponse


class TokenPayload(BaseModel):
    """Schema para payload del token"""
    IdUsuario: int
    Usuario: str
    IdRol: int
    exp: Optional[datetime] = None
