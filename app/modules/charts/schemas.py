from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime


class DailyTotal(BaseModel):
    movement_date: date = Field(..., alias="FechaMovimiento")
    total_quantity: int = Field(..., alias="TotalCantidad")

    class Config:
        populate_by_name = True


class CurrentLot(BaseModel):
    lot_id: int = Field(..., alias="IdLote")
    product_id: int = Field(..., alias="IdProducto")
    name: str = Field(..., alias="Nombre")
    initial_quantity: int = Field(..., alias="CantidadInicial")
    current_quantity: int = Field(..., alias="CantidadActual")
    entry_date: datetime = Field(..., alias="FechaEntrada")
    expiry_date: Optional[date] = Field(None, alias="FechaCaducidad")
    notes: Optional[str] = Field(None, alias="Notas")
    user_id: Optional[int] = Field(None, alias="IdUsuario")
    has_serial: bool = Field(..., alias="HasNumSerie")

    class Config:
        populate_by_name = True


class LotExpiry(BaseModel):
    lot_id: int = Field(..., alias="IdLote")
    name: str = Field(..., alias="Nombre")
    entry_date: datetime = Field(..., alias="FechaEntrada")
    expiry_date: date = Field(..., alias="FechaCaducidad")

    class Config:
        populate_by_name = True


class ExpiringLot(BaseModel):
    lot_id: int = Field(..., alias="IdLote")
    label: str = Field(..., alias="NombreProductoLote")
    entry_date: datetime = Field(..., alias="FechaEntrada")
    expiry_date: date = Field(..., alias="FechaCaducidad")
    days_to_expire: int = Field(..., alias="DiasParaVencer")
    current_quantity: int = Field(..., alias="CantidadActual")

    class Config:
        populate_by_name = True


class ProductBelowMinimum(BaseModel):
    product_id: int = Field(..., alias="IdProducto")
    name: str = Field(..., alias="Nombre")
    current_stock: int = Field(..., alias="StockActual")
    min_stock: int = Field(..., alias="StockMinimo")
    shortfall: int = Field(..., alias="Diferencia")

    class Config:
        populate_by_name = True
