# =========================================================
# REPORTING / AGGREGATION
#
# Everything here is derived from the sale ledger on read.
# Prices come from the line-item snapshots, so later price
# edits and deleted books never change historical figures.
#
# Date-only inputs are widened to whole days in the
# reporting timezone and compared in UTC.
# =========================================================

from datetime import date, datetime, time, timezone, tzinfo
from decimal import Decimal
from typing import Optional
from zoneinfo import ZoneInfo

from sqlalchemy import func
from sqlalchemy.orm import Session

from bookshop.core.config import settings
from bookshop.core.errors import ValidationError
from bookshop.models.sale_items import SaleItem
from bookshop.models.sales import Sale
from bookshop.models.students import Student
from bookshop.services.sales import populated_sale_options


def reporting_timezone() -> tzinfo:
    return ZoneInfo(settings.REPORT_TIMEZONE)


def start_of_day(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)


def end_of_day(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, time.max, tzinfo=tz).astimezone(timezone.utc)


def _date_filters(
    start_date: Optional[date],
    end_date: Optional[date],
    tz: tzinfo,
) -> list:
    if start_date and end_date and start_date > end_date:
        raise ValidationError("start_date cannot be after end_date")

    filters = []

    if start_date:
        filters.append(Sale.created_at >= start_of_day(start_date, tz))

    if end_date:
        filters.append(Sale.created_at <= end_of_day(end_date, tz))

    return filters


# =========================================================
# SALE LISTS
# =========================================================
def get_report(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> list[Sale]:
    filters = _date_filters(start_date, end_date, tz or reporting_timezone())

    return (
        db.query(Sale)
        .options(*populated_sale_options())
        .filter(*filters)
        .order_by(Sale.created_at.desc(), Sale.id.desc())
        .all()
    )


def get_recent(db: Session, limit: int = 5) -> list[Sale]:
    return (
        db.query(Sale)
        .options(*populated_sale_options())
        .order_by(Sale.created_at.desc(), Sale.id.desc())
        .limit(limit)
        .all()
    )


# =========================================================
# TOTALS
# =========================================================
def _sum_total_amount(db: Session, filters: list) -> Decimal:
    total = (
        db.query(func.coalesce(func.sum(Sale.total_amount), 0))
        .filter(*filters)
        .scalar()
    )
    return Decimal(total or 0)


def get_today_total(
    db: Session,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> Decimal:
    tz = tz or reporting_timezone()
    today = today or datetime.now(tz).date()

    return _sum_total_amount(db, _date_filters(today, today, tz))


def get_all_time_total(db: Session) -> Decimal:
    return _sum_total_amount(db, [])


def summarize(
    db: Session,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> dict:
    filters = _date_filters(start_date, end_date, tz or reporting_timezone())

    total_sales = _sum_total_amount(db, filters)

    total_transactions = (
        db.query(func.count(Sale.id))
        .filter(*filters)
        .scalar()
    )

    total_books = (
        db.query(func.coalesce(func.sum(SaleItem.quantity), 0))
        .join(Sale, SaleItem.sale_id == Sale.id)
        .filter(*filters)
        .scalar()
    )

    if total_transactions:
        average = (total_sales / total_transactions).quantize(Decimal("0.01"))
    else:
        average = Decimal("0.00")

    return {
        "total_sales": total_sales,
        "total_transactions": total_transactions or 0,
        "total_books": int(total_books or 0),
        "average_transaction_value": average,
        "start_date": start_date,
        "end_date": end_date,
    }


# =========================================================
# PER-STUDENT SUMMARIES
# =========================================================
def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def get_student_summaries(
    db: Session,
    search: Optional[str] = None,
    class_level: Optional[str] = None,
) -> list[dict]:
    """Group every sale by the buyer's (name, class level).

    Students are not deduplicated when sales are recorded, so the
    grouping is by identity rather than by student id.
    """
    books_per_sale = (
        db.query(
            SaleItem.sale_id.label("sale_id"),
            func.sum(SaleItem.quantity).label("book_count"),
        )
        .group_by(SaleItem.sale_id)
        .subquery()
    )

    last_purchase = func.max(Sale.created_at)

    query = (
        db.query(
            Student.name.label("name"),
            Student.class_level.label("class_level"),
            func.coalesce(func.sum(Sale.total_amount), 0).label("total_spent"),
            func.count(Sale.id).label("purchase_count"),
            func.coalesce(func.sum(books_per_sale.c.book_count), 0).label("book_count"),
            last_purchase.label("last_purchase"),
        )
        .join(Sale, Sale.student_id == Student.id)
        .outerjoin(books_per_sale, books_per_sale.c.sale_id == Sale.id)
        .group_by(Student.name, Student.class_level)
    )

    if search:
        query = query.filter(
            Student.name.ilike(f"%{_escape_like(search.strip())}%", escape="\\")
        )

    if class_level:
        query = query.filter(Student.class_level == class_level)

    rows = query.order_by(last_purchase.desc(), Student.name.asc()).all()

    return [
        {
            "name": row.name,
            "class_level": row.class_level,
            "total_spent": Decimal(row.total_spent or 0),
            "purchase_count": row.purchase_count,
            "book_count": int(row.book_count or 0),
            "last_purchase": row.last_purchase,
        }
        for row in rows
    ]
