from pydantic import BaseModel, Field, validator
from typing import Optional

from app.shared.schemas.common import RecordStatus


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., alias="Nombre", max_length=100, description="Nombre de la categoría")
    description: Optional[str] = Field(None, alias="Descripcion", max_length=255)

    @validator('name')
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('El campo "Nombre" es obligatorio.')
        return v.strip()

    class Config:
        populate_by_name = True


class CategoryUpdateRequest(CategoryCreateRequest):
    status: Optional[RecordStatus] = Field(None, alias="Estado", description="Activo o Inactivo")


class CategoryResponse(BaseModel):
    id: int = Field(..., alias="IdCategoria")
    name: str = Field(..., alias="Nombre")
    description: Optional[str] = Field(None, alias="Descripcion")
    status: str = Field(..., alias="Estado")

    class Config:
        from_attributes = True
        populate_by_name = True


class CategoryCreatedResponse(BaseModel):
    id: int = Field(..., alias="IdCategoria")

    class Config:
        populate_by_name = True
