from decimal import Decimal
from pydantic import BaseModel, Field

from bookshop.core.constants import MAX_DB_INT, MAX_PRICE, ClassLevel
from bookshop.schemas.types import UTCDateTime


class BookCreate(BaseModel):
    title: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    class_level: ClassLevel

    price: Decimal = Field(
        ...,
        ge=0,
        lt=MAX_PRICE,
        description="Price must be below 100 million"
    )

    stock: int = Field(0, ge=0, le=MAX_DB_INT)


class BookStockUpdate(BaseModel):
    # Negative values are rejected by the catalog
    stock: int = Field(..., le=MAX_DB_INT)


class BookPriceUpdate(BaseModel):
    price: Decimal = Field(..., lt=MAX_PRICE)


class BookResponse(BaseModel):
    id: int
    title: str
    subject: str
    class_level: str
    price: Decimal
    stock: int
    created_at: UTCDateTime

    class Config:
        from_attributes = True


class BookSummary(BaseModel):
    id: int
    title: str
    subject: str
    class_level: str
    price: Decimal

    class Config:
        from_attributes = True
