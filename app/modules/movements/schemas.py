from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime

from app.shared.schemas.common import MovementType


class MovementCreateRequest(BaseModel):
    """Salida de producto o devolución (Entrada) a un lote existente"""
    lot_id: int = Field(..., alias="IdLote", description="ID del lote")
    movement_type: MovementType = Field(..., alias="TipoMovimiento", description="Entrada o Salida")
    quantity: int = Field(..., alias="Cantidad")
    notes: Optional[str] = Field(None, alias="Notas", max_length=255)
    serial_number: Optional[str] = Field(None, alias="NumSerie", max_length=30)

    @validator('quantity')
    def validate_quantity(cls, v):
        if v <= 0:
            raise ValueError('La cantidad debe ser un número entero positivo.')
        return v

    @validator('serial_number')
    def normalize_serial(cls, v):
        if v is None:
            return v
        return v.strip() or None

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "IdLote": 1,
                "TipoMovimiento": "Salida",
                "Cantidad": 1,
                "Notas": "Entrega a farmacia",
                "NumSerie": "A1"
            }
        }


class MovementCreatedResponse(BaseModel):
    id: int = Field(..., alias="IdMovimiento")

    class Config:
        populate_by_name = True


class MovementResponse(BaseModel):
    id: int = Field(..., alias="IdMovimiento")
    lot_id: int = Field(..., alias="IdLote")
    product_id: int = Field(..., alias="IdProducto")
    product_name: str = Field(..., alias="NombreProducto")
    movement_type: str = Field(..., alias="TipoMovimiento")
    quantity: int = Field(..., alias="Cantidad")
    notes: Optional[str] = Field(None, alias="Notas")
    serial_number: Optional[str] = Field(None, alias="NumSerie")
    movement_date: datetime = Field(..., alias="FechaMovimiento")
    user_id: int = Field(..., alias="IdUsuario")
    username: Optional[str] = Field(None, alias="Usuario")

    class Config:
        populate_by_name = True
