# app/shared/schemas/common.py
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
from datetime import datetime
from enum import Enum


class RecordStatus(str, Enum):
    """Estado lógico de categorías, usuarios y números de serie"""
    ACTIVE = "Activo"
    INACTIVE = "Inactivo"


class MovementType(str, Enum):
    """Tipos de movimiento de inventario"""
    ENTRADA = "Entrada"
    SALIDA = "Salida"


class BaseResponse(BaseModel):
    success: bool
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseResponse):
    success: bool = False
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class MessageResponse(BaseResponse):
    success: bool = True
