# app/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Date,
    ForeignKey, CheckConstraint, func
)
from sqlalchemy.orm import relationship, declarative_base
from datetime import datetime

Base = declarative_base()


# =====================================================
# MIXIN PARA TIMESTAMPS
# =====================================================
class TimestampMixin:
    """Mixin que agrega campos created_at y updated_at"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# USUARIOS Y ROLES
# =====================================================

class Role(Base):
    """Modelo de Rol"""
    __tablename__ = "Roles"

    id = Column("IdRol", Integer, primary_key=True, autoincrement=False)
    name = Column("Nombre", String(50), nullable=False)

    users = relationship("User", back_populates="role")


class User(Base, TimestampMixin):
    """Modelo de Usuario"""
    __tablename__ = "Usuarios"

    id = Column("IdUsuario", Integer, primary_key=True, index=True)
    username = Column("Usuario", String(50), nullable=False, unique=True)
    first_name = Column("Nombre", String(50), nullable=False)
    last_name = Column("ApellidoPaterno", String(50), nullable=False)
    password_hash = Column("Contrasena", String(255), nullable=False)
    role_id = Column("IdRol", Integer, ForeignKey("Roles.IdRol"), nullable=False)
    status = Column("Estado", String(10), nullable=False, default="Activo")

    # Relationships
    role = relationship("Role", back_populates="users")

    @property
    def is_active(self) -> bool:
        return self.status == "Activo"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


# =====================================================
# CATÁLOGO
# =====================================================

class Category(Base, TimestampMixin):
    """Modelo de Categoría"""
    __tablename__ = "Categorias"

    id = Column("IdCategoria", Integer, primary_key=True, index=True)
    name = Column("Nombre", String(100), nullable=False, index=True)
    description = Column("Descripcion", String(255))
    status = Column("Estado", String(10), nullable=False, default="Activo")

    products = relationship("Product", back_populates="category")


class Product(Base, TimestampMixin):
    """Modelo de Producto"""
    __tablename__ = "Productos"

    id = Column("IdProducto", Integer, primary_key=True, index=True)
    name = Column("Nombre", String(100), nullable=False, index=True)
    description = Column("Descripcion", String(255))
    category_id = Column("IdCategoria", Integer, ForeignKey("Categorias.IdCategoria"), nullable=False, index=True)
    min_stock = Column("StockMinimo", Integer, nullable=False, default=0)
    max_stock = Column("StockMaximo", Integer, nullable=False, default=0)
    has_serial = Column("HasNumSerie", Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint('"StockMinimo" >= 0', name='ck_productos_stock_minimo'),
        CheckConstraint('"StockMinimo" <= "StockMaximo"', name='ck_productos_stock_rango'),
    )

    # Relationships
    category = relationship("Category", back_populates="products")
    lots = relationship("Lot", back_populates="product")


# =====================================================
# LOTES, NÚMEROS DE SERIE Y MOVIMIENTOS
# =====================================================

class Lot(Base):
    """Modelo de Lote"""
    __tablename__ = "Lotes"

    id = Column("IdLote", Integer, primary_key=True, index=True)
    product_id = Column("IdProducto", Integer, ForeignKey("Productos.IdProducto"), nullable=False, index=True)
    entry_date = Column("FechaEntrada", DateTime, nullable=False, default=datetime.now)
    expiry_date = Column("FechaCaducidad", Date)
    initial_quantity = Column("CantidadInicial", Integer, nullable=False)
    current_quantity = Column("CantidadActual", Integer, nullable=False)
    notes = Column("Notas", String(255))
    user_id = Column("IdUsuario", Integer, ForeignKey("Usuarios.IdUsuario"))

    __table_args__ = (
        CheckConstraint('"CantidadInicial" > 0', name='ck_lotes_cantidad_inicial'),
        CheckConstraint(
            '"CantidadActual" >= 0 AND "CantidadActual" <= "CantidadInicial"',
            name='ck_lotes_cantidad_actual'
        ),
    )

    # Relationships
    product = relationship("Product", back_populates="lots")
    created_by = relationship("User")
    serial_units = relationship("SerialUnit", back_populates="lot")
    movements = relationship("InventoryMovement", back_populates="lot")


class SerialUnit(Base):
    """Modelo de unidad serializada (DetalleProducto)"""
    __tablename__ = "DetalleProducto"

    id = Column("IdDetalle", Integer, primary_key=True, index=True)
    lot_id = Column("IdLote", Integer, ForeignKey("Lotes.IdLote"), nullable=False, index=True)
    product_id = Column("IdProducto", Integer, ForeignKey("Productos.IdProducto"), nullable=False)
    serial_number = Column("NumSerie", String(30), nullable=False, unique=True)
    status = Column("Estado", String(10), nullable=False, default="Activo")

    lot = relationship("Lot", back_populates="serial_units")


class InventoryMovement(Base):
    """Modelo de Movimiento de Inventario (solo inserción)"""
    __tablename__ = "MovimientosInventario"

    id = Column("IdMovimiento", Integer, primary_key=True, index=True)
    lot_id = Column("IdLote", Integer, ForeignKey("Lotes.IdLote"), nullable=False, index=True)
    movement_type = Column("TipoMovimiento", String(10), nullable=False)
    quantity = Column("Cantidad", Integer, nullable=False)
    notes = Column("Notas", String(255))
    user_id = Column("IdUsuario", Integer, ForeignKey("Usuarios.IdUsuario"), nullable=False)
    serial_number = Column("NumSerie", String(30))
    movement_date = Column("FechaMovimiento", DateTime, nullable=False, default=datetime.now, index=True)

    __table_args__ = (
        CheckConstraint('"Cantidad" > 0', name='ck_movimientos_cantidad'),
    )

    lot = relationship("Lot", back_populates="movements")
    user = relationship("User")


# =====================================================
# CONFIGURACIÓN
# =====================================================

class Configuration(Base):
    """Pares clave/valor de configuración del proceso (p. ej. StockStop)"""
    __tablename__ = "Configuraciones"

    id = Column("IdConfiguracion", Integer, primary_key=True)
    key = Column("Clave", String(50), nullable=False, unique=True)
    value = Column("Valor", String(50), nullable=False)
    updated_at = Column(DateTime, server_default=func.current_timestamp(), onupdate=func.current_timestamp())
