from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import date, datetime


class LotCreateRequest(BaseModel):
    """
    Registro de un lote nuevo.

    Para productos con número de serie, `serialNumbers` debe traer exactamente
    `cantidad` códigos distintos. El usuario se toma del token.
    """
    product_id: int = Field(..., alias="producto", description="ID del producto")
    expiry_date: Optional[date] = Field(None, alias="fechaCaducidad")
    entry_date: Optional[datetime] = Field(None, alias="fechaEntrada", description="Por defecto, ahora")
    quantity: int = Field(..., alias="cantidad")
    notes: Optional[str] = Field(None, alias="notas", max_length=255)
    serial_numbers: Optional[List[str]] = Field(None, alias="serialNumbers")

    @validator('quantity')
    def validate_quantity(cls, v):
        if v <= 0:
            raise ValueError('La cantidad debe ser un número entero positivo.')
        return v

    @validator('serial_numbers')
    def validate_serial_length(cls, v):
        if v and any(len(code.strip()) > 30 for code in v):
            raise ValueError('El número de serie no puede exceder 30 caracteres.')
        return v

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "producto": 2,
                "fechaCaducidad": "2026-12-31",
                "cantidad": 2,
                "notas": "Compra a proveedor",
                "serialNumbers": ["A1", "A2"]
            }
        }


class LotCreatedResponse(BaseModel):
    id: int = Field(..., alias="IdLote")

    class Config:
        populate_by_name = True


class LotResponse(BaseModel):
    id: int = Field(..., alias="IdLote")
    product_id: int = Field(..., alias="IdProducto")
    product_name: str = Field(..., alias="NombreProducto")
    has_serial: bool = Field(..., alias="HasNumSerie")
    entry_date: datetime = Field(..., alias="FechaEntrada")
    expiry_date: Optional[date] = Field(None, alias="FechaCaducidad")
    initial_quantity: int = Field(..., alias="CantidadInicial")
    current_quantity: int = Field(..., alias="CantidadActual")
    notes: Optional[str] = Field(None, alias="Notas")
    user_id: Optional[int] = Field(None, alias="IdUsuario")
    username: Optional[str] = Field(None, alias="Usuario")

    class Config:
        populate_by_name = True


class SerialNumberResponse(BaseModel):
    serial_number: str = Field(..., alias="NumSerie")

    class Config:
        from_attributes = True
        populate_by_name = True
