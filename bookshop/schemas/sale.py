# schemas/sale.py

from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal

from bookshop.core.constants import MAX_DB_INT
from bookshop.schemas.book import BookSummary
from bookshop.schemas.student import StudentResponse
from bookshop.schemas.types import UTCDateTime

class SaleItemCreate(BaseModel):
    book_id: int = Field(..., ge=1, le=MAX_DB_INT)
    # Non-positive quantities are rejected by the sale service
    quantity: int = Field(..., le=MAX_DB_INT)

class SaleCreate(BaseModel):
    # Either an existing student_id, or the name and class of the buyer
    student_id: Optional[int] = Field(None, ge=1, le=MAX_DB_INT)
    student_name: Optional[str] = None
    student_class: Optional[str] = None
    items: List[SaleItemCreate]
    request_id: Optional[str] = None

class SaleItemResponse(BaseModel):
    book_id: int
    book: Optional[BookSummary] = None
    title_at_sale: str
    quantity: int
    price_at_sale: Decimal
    line_total: Decimal

    class Config:
        from_attributes = True

class SaleResponse(BaseModel):
    id: int
    student: StudentResponse
    total_amount: Decimal
    created_at: UTCDateTime
    items: List[SaleItemResponse]

    class Config:
        from_attributes = True


class SalesTotalsResponse(BaseModel):
    today_total: Decimal
    all_time_total: Decimal
    currency: str
