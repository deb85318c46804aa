from pydantic import BaseModel, Field


class StockStopStatusResponse(BaseModel):
    stock_stop_active: bool = Field(..., alias="stockStopActive")

    class Config:
        populate_by_name = True
