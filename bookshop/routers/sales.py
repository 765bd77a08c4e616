# =========================================================
# SALES ROUTER
#
# POST /sales is the only write path into the sale ledger.
# Everything else here reads the ledger through the
# reporting service.
# =========================================================

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status, Request
from sqlalchemy.orm import Session

from bookshop.database import get_db
from bookshop.core.auth import get_current_user
from bookshop.core.constants import MAX_DB_INT
from bookshop.core.config import settings
from bookshop.core.rate_limiter import limiter
from bookshop.core.store import StoreContext, get_store_context
from bookshop.schemas.sale import SaleCreate, SaleResponse, SalesTotalsResponse
from bookshop.services import reporting
from bookshop.services import sales as sale_service

router = APIRouter(
    prefix="/sales",
    tags=["Sales"],
    dependencies=[Depends(get_current_user)],
)


# =========================================================
# CREATE SALE
# =========================================================
@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
def create_sale(
    request: Request,
    sale_data: SaleCreate,
    db: Session = Depends(get_db),
):
    return sale_service.create_sale(
        db,
        sale_data,
        deduplicate_students=settings.DEDUPLICATE_STUDENTS,
    )


# =========================================================
# REPORT (DATE RANGE, NEWEST FIRST)
# =========================================================
@router.get("/report", response_model=list[SaleResponse])
def sales_report(
    db: Session = Depends(get_db),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
):
    return reporting.get_report(db, start_date, end_date)


@router.get("/recent", response_model=list[SaleResponse])
def recent_sales(
    db: Session = Depends(get_db),
    limit: int = Query(settings.RECENT_SALES_LIMIT, ge=1, le=100),
):
    return reporting.get_recent(db, limit)


@router.get("/totals", response_model=SalesTotalsResponse)
def sales_totals(
    db: Session = Depends(get_db),
    store: StoreContext = Depends(get_store_context),
):
    return {
        "today_total": reporting.get_today_total(db),
        "all_time_total": reporting.get_all_time_total(db),
        "currency": store.currency,
    }


# =========================================================
# GET SINGLE SALE (RECEIPT)
# =========================================================
@router.get("/{sale_id}", response_model=SaleResponse)
def get_sale(
    sale_id: int = Path(..., le=MAX_DB_INT),
    db: Session = Depends(get_db),
):
    return sale_service.get_sale(db, sale_id)
