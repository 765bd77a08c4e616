from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from datetime import date, datetime
from io import BytesIO
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Font
from fastapi.responses import StreamingResponse

from bookshop.database import get_db
from bookshop.core.auth import get_current_user
from bookshop.core.rate_limiter import limiter
from bookshop.core.store import StoreContext, get_store_context
from bookshop.models.sales import Sale
from bookshop.services import reporting

router = APIRouter(
    prefix="/exports",
    tags=["Exports"],
    dependencies=[Depends(get_current_user)],
)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

HEADERS = [
    "Date",
    "Student Name",
    "Class",
    "Book",
    "Quantity",
    "Unit Price",
    "Line Total",
    "Sale Total",
]


# =========================================================
# EXPORT ROUTE
# =========================================================
@router.get("/sales")
@limiter.limit("10/minute")
def export_sales(
    request: Request,
    db: Session = Depends(get_db),
    store: StoreContext = Depends(get_store_context),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
):
    sales = reporting.get_report(db, start_date, end_date)

    start_label = start_date.isoformat() if start_date else "start"
    end_label = end_date.isoformat() if end_date else "latest"

    return _build_excel(
        sales=sales,
        store=store,
        start_date=start_date,
        end_date=end_date,
        filename=f"sales_report_{start_label}_to_{end_label}.xlsx",
    )


# =========================================================
# EXCEL BUILDER
# =========================================================
def _format_period(start_date: Optional[date], end_date: Optional[date]) -> str:
    if not start_date and not end_date:
        return "All sales"
    return f"{start_date or 'Beginning'} to {end_date or 'Today'}"


def build_sales_workbook(
    sales: list[Sale],
    store: StoreContext,
    start_date: Optional[date],
    end_date: Optional[date],
) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = "Sales"

    bold = Font(bold=True)

    ws.append([store.store_name])
    ws["A1"].font = Font(bold=True, size=14)
    ws.append(["Period", _format_period(start_date, end_date)])
    ws.append(["Currency", store.currency])
    ws.append([])

    ws.append(HEADERS)
    for cell in ws[ws.max_row]:
        cell.font = bold

    grand_total = 0
    books_sold = 0

    # One row per line item; the sale total repeats on each of them
    for sale in sales:
        created_at = sale.created_at
        if isinstance(created_at, datetime):
            created_at = created_at.replace(tzinfo=None)

        for item in sale.items:
            ws.append([
                created_at,
                sale.student.name,
                sale.student.class_level,
                item.title_at_sale,
                item.quantity,
                float(item.price_at_sale),
                float(item.line_total),
                float(sale.total_amount),
            ])
            books_sold += item.quantity

        grand_total += sale.total_amount

    ws.append([])
    ws.append(["Transactions", len(sales)])
    ws.append(["Books Sold", books_sold])
    ws.append(["Total Sales", store.format_currency(grand_total)])

    for column, width in zip("ABCDEFGH", (20, 24, 10, 32, 10, 12, 12, 12)):
        ws.column_dimensions[column].width = width

    return wb


def _build_excel(
    sales: list[Sale],
    store: StoreContext,
    start_date: Optional[date],
    end_date: Optional[date],
    filename: str,
):
    wb = build_sales_workbook(sales, store, start_date, end_date)

    output = BytesIO()
    wb.save(output)
    output.seek(0)

    return StreamingResponse(
        output,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
