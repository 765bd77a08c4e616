# schemas/report.py

from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import List, Optional

from bookshop.schemas.book import BookResponse
from bookshop.schemas.sale import SaleResponse


class SalesSummaryResponse(BaseModel):
    total_sales: Decimal
    total_transactions: int
    total_books: int
    average_transaction_value: Decimal
    start_date: Optional[date]
    end_date: Optional[date]
    currency: str


class DashboardResponse(BaseModel):
    store_name: str
    currency: str
    today_total: Decimal
    all_time_total: Decimal
    total_books_in_stock: int
    low_stock_threshold: int
    low_stock_books: List[BookResponse]
    recent_sales: List[SaleResponse]
