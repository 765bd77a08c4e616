# =========================================================
# REPORTS ROUTER
#
# Aggregates for the dashboard and the reports page. All
# figures are recomputed from the ledger on every call;
# clients poll these endpoints to refresh.
# =========================================================

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bookshop.database import get_db
from bookshop.core.auth import get_current_user
from bookshop.core.config import settings
from bookshop.core.store import StoreContext, get_store_context
from bookshop.schemas.report import DashboardResponse, SalesSummaryResponse
from bookshop.services import catalog, reporting

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/summary", response_model=SalesSummaryResponse)
def sales_summary(
    db: Session = Depends(get_db),
    store: StoreContext = Depends(get_store_context),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
):
    summary = reporting.summarize(db, start_date, end_date)
    summary["currency"] = store.currency

    return summary


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    db: Session = Depends(get_db),
    store: StoreContext = Depends(get_store_context),
):
    return {
        "store_name": store.store_name,
        "currency": store.currency,
        "today_total": reporting.get_today_total(db),
        "all_time_total": reporting.get_all_time_total(db),
        "total_books_in_stock": catalog.total_books_in_stock(db),
        "low_stock_threshold": store.low_stock_threshold,
        "low_stock_books": catalog.low_stock_books(db, store.low_stock_threshold),
        "recent_sales": reporting.get_recent(db, settings.RECENT_SALES_LIMIT),
    }
