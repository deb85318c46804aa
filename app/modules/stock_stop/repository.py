# app/modules/stock_stop/repository.py
from sqlalchemy.orm import Session
from typing import Optional
import logging

from app.shared.database.models import Configuration

logger = logging.getLogger(__name__)

STOCK_STOP_KEY = "StockStop"


class StockStopRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_value(self) -> Optional[str]:
        """Valor crudo de la bandera; None si no existe el registro"""
        config = self.db.query(Configuration).filter(
            Configuration.key == STOCK_STOP_KEY
        ).first()
        return config.value if config else None

    def set_value(self, active: bool) -> Configuration:
        """Actualizar la bandera, insertándola si no existe"""
        value = "true" if active else "false"
        try:
            config = self.db.query(Configuration).filter(
                Configuration.key == STOCK_STOP_KEY
            ).first()

            if config is None:
                config = Configuration(key=STOCK_STOP_KEY, value=value)
                self.db.add(config)
            else:
                config.value = value

            self.db.commit()
            self.db.refresh(config)
            return config

        except Exception:
            logger.exception("Error actualizando la Parada de stock")
            self.db.rollback()
            raise
