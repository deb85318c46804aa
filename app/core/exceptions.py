# app/core/exceptions.py
from fastapi import HTTPException, status


class InvalidRequestError(HTTPException):
    """Regla de negocio o dato de entrada inválido"""
    error_code = "validation_error"

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFoundError(HTTPException):
    error_code = "not_found"

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    """Violación de unicidad: usuario, número de serie o nombre de categoría"""
    error_code = "conflict"

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenOperationError(HTTPException):
    """Operación bloqueada por política (p. ej. Parada de stock)"""
    error_code = "forbidden"

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
