from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import date, datetime


class ProductCreateRequest(BaseModel):
    name: str = Field(..., alias="Nombre", max_length=100, description="Nombre del producto")
    description: Optional[str] = Field(None, alias="Descripcion", max_length=255)
    category_id: int = Field(..., alias="IdCategoria", description="ID de la categoría")
    min_stock: int = Field(..., alias="StockMinimo", description="Stock mínimo")
    max_stock: int = Field(..., alias="StockMaximo", description="Stock máximo")
    has_serial: bool = Field(False, alias="HasNumSerie", description="Maneja número de serie por unidad")

    @validator('name')
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('El campo "Nombre" debe ser una cadena de texto no vacía.')
        return v.strip()

    @validator('min_stock')
    def validate_min_stock(cls, v):
        if v < 0:
            raise ValueError('El campo "StockMinimo" debe ser un número entero no negativo.')
        return v

    @validator('max_stock')
    def validate_max_stock(cls, v, values):
        min_stock = values.get('min_stock')
        if min_stock is not None and v < min_stock:
            raise ValueError('El campo "StockMaximo" debe ser un número entero mayor o igual a "StockMinimo".')
        return v

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "Nombre": "Paracetamol 500mg",
                "Descripcion": "Caja con 20 tabletas",
                "IdCategoria": 1,
                "StockMinimo": 10,
                "StockMaximo": 100,
                "HasNumSerie": False
            }
        }


class ProductUpdateRequest(ProductCreateRequest):
    pass


class ProductResponse(BaseModel):
    id: int = Field(..., alias="IdProducto")
    name: str = Field(..., alias="Nombre")
    description: Optional[str] = Field(None, alias="Descripcion")
    category_id: int = Field(..., alias="IdCategoria")
    category_name: Optional[str] = Field(None, alias="NombreCategoria")
    min_stock: int = Field(..., alias="StockMinimo")
    max_stock: int = Field(..., alias="StockMaximo")
    has_serial: bool = Field(..., alias="HasNumSerie")
    current_stock: int = Field(0, alias="StockActual", description="Suma de CantidadActual de sus lotes")

    class Config:
        populate_by_name = True


class ProductCreatedResponse(BaseModel):
    id: int = Field(..., alias="IdProducto")

    class Config:
        populate_by_name = True


class KardexEntry(BaseModel):
    """Renglón del kardex; los lotes aparecen como entradas de apertura"""
    origin: str = Field(..., alias="Origen", description="Lote o Movimiento")
    movement_id: Optional[int] = Field(None, alias="IdMovimiento")
    movement_date: datetime = Field(..., alias="FechaMovimiento")
    movement_type: str = Field(..., alias="TipoMovimiento")
    quantity: int = Field(..., alias="Cantidad")
    notes: Optional[str] = Field(None, alias="Notas")
    serial_number: Optional[str] = Field(None, alias="NumSerie")
    lot_id: int = Field(..., alias="IdLote")
    product_id: int = Field(..., alias="IdProducto")
    product_name: str = Field(..., alias="NombreProducto")
    balance: int = Field(..., alias="Saldo")

    class Config:
        populate_by_name = True


class OpeningBalanceResponse(BaseModel):
    saldoInicial: int


class ProductDailyMovements(BaseModel):
    movement_date: date = Field(..., alias="FechaMovimiento")
    inbound: int = Field(0, alias="Entradas")
    outbound: int = Field(0, alias="Salidas")

    class Config:
        populate_by_name = True
