from pydantic import BaseModel, Field
from decimal import Decimal

from bookshop.core.constants import ClassLevel
from bookshop.schemas.types import UTCDateTime


class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    class_level: ClassLevel


class StudentUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    class_level: ClassLevel | None = None


class StudentResponse(BaseModel):
    id: int
    name: str
    class_level: str
    created_at: UTCDateTime

    class Config:
        from_attributes = True


class StudentSummaryResponse(BaseModel):
    name: str
    class_level: str
    total_spent: Decimal
    purchase_count: int
    book_count: int
    last_purchase: UTCDateTime
