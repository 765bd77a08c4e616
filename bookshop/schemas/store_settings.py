from pydantic import BaseModel, Field

from bookshop.core.constants import MAX_DB_INT, Currency


class StoreSettingsUpdate(BaseModel):
    store_name: str = Field(..., min_length=1)
    currency: Currency
    low_stock_threshold: int = Field(..., ge=0, le=MAX_DB_INT)


class StoreSettingsResponse(BaseModel):
    store_name: str
    currency: str
    low_stock_threshold: int

    class Config:
        from_attributes = True
