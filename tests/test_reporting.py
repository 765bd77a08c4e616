from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from bookshop.core.errors import ValidationError
from bookshop.schemas.sale import SaleCreate
from bookshop.services import catalog, reporting
from bookshop.services import sales as sale_service

UTC = timezone.utc
REPORT_DAY = date(2026, 3, 10)


def at(day, hour, minute=0, second=0, microsecond=0):
    return datetime(day.year, day.month, day.day, hour, minute, second, microsecond, tzinfo=UTC)


# =========================================================
# DATE RANGE REPORT
# =========================================================
def test_single_day_report_includes_both_day_boundaries(db, book_factory, sale_recorder):
    book = book_factory(stock=50)
    next_day = REPORT_DAY + timedelta(days=1)

    sale_recorder("Before", "Basic 1", [(book, 1, "10.00")], at(REPORT_DAY - timedelta(days=1), 23, 59, 59, 999999))
    first = sale_recorder("Opening", "Basic 1", [(book, 1, "10.00")], at(REPORT_DAY, 0, 0, 0))
    last = sale_recorder("Closing", "Basic 1", [(book, 1, "10.00")], at(REPORT_DAY, 23, 59, 59))
    sale_recorder("After", "Basic 1", [(book, 1, "10.00")], at(next_day, 0, 0, 0))

    sales = reporting.get_report(db, REPORT_DAY, REPORT_DAY, tz=UTC)

    assert [sale.id for sale in sales] == [last.id, first.id]


def test_report_without_bounds_returns_everything_newest_first(db, book_factory, sale_recorder):
    book = book_factory(stock=50)

    older = sale_recorder("Ama", "Basic 2", [(book, 1, "10.00")], at(REPORT_DAY, 9))
    newer = sale_recorder("Esi", "Basic 3", [(book, 1, "10.00")], at(REPORT_DAY, 15))

    assert [sale.id for sale in reporting.get_report(db)] == [newer.id, older.id]


def test_open_ended_ranges(db, book_factory, sale_recorder):
    book = book_factory(stock=50)

    early = sale_recorder("Ama", "Basic 2", [(book, 1, "10.00")], at(date(2026, 1, 5), 12))
    late = sale_recorder("Esi", "Basic 3", [(book, 1, "10.00")], at(date(2026, 5, 5), 12))

    assert [s.id for s in reporting.get_report(db, start_date=date(2026, 2, 1), tz=UTC)] == [late.id]
    assert [s.id for s in reporting.get_report(db, end_date=date(2026, 2, 1), tz=UTC)] == [early.id]


def test_report_days_follow_the_reporting_timezone(db, book_factory, sale_recorder):
    book = book_factory(stock=50)
    lagos = ZoneInfo("Africa/Lagos")

    # 23:30 UTC on the 10th is already 00:30 on the 11th in Lagos
    late_evening = sale_recorder("Ama", "Basic 2", [(book, 1, "10.00")], at(REPORT_DAY, 23, 30))

    assert reporting.get_report(db, REPORT_DAY, REPORT_DAY, tz=lagos) == []
    eleventh = REPORT_DAY + timedelta(days=1)
    assert [s.id for s in reporting.get_report(db, eleventh, eleventh, tz=lagos)] == [late_evening.id]


def test_reversed_range_is_rejected(db):
    with pytest.raises(ValidationError):
        reporting.get_report(db, date(2026, 3, 11), date(2026, 3, 10))


def test_report_survives_deleted_books(db, book_factory):
    book = book_factory(title="Retired Reader", price="6.00", stock=5)
    sale = sale_service.create_sale(
        db,
        SaleCreate(student_name="Ama", student_class="Basic 2", items=[{"book_id": book.id, "quantity": 2}]),
    )

    catalog.delete_book(db, book.id)
    db.expire_all()

    sales = reporting.get_report(db)

    assert [s.id for s in sales] == [sale.id]
    item = sales[0].items[0]
    assert item.book is None
    assert item.book_id == book.id
    assert item.title_at_sale == "Retired Reader"
    assert item.price_at_sale == Decimal("6.00")


# =========================================================
# RECENT AND TOTALS
# =========================================================
def test_recent_sales_are_limited_and_newest_first(db, book_factory, sale_recorder):
    book = book_factory(stock=50)
    recorded = [
        sale_recorder(f"Student {hour}", "Basic 1", [(book, 1, "5.00")], at(REPORT_DAY, hour))
        for hour in range(8, 15)
    ]

    recent = reporting.get_recent(db, 5)

    assert [s.id for s in recent] == [s.id for s in reversed(recorded)][:5]


def test_today_and_all_time_totals(db, book_factory, sale_recorder):
    book = book_factory(stock=50)

    sale_recorder("Ama", "Basic 2", [(book, 2, "10.00")], at(REPORT_DAY - timedelta(days=3), 10))
    sale_recorder("Esi", "Basic 3", [(book, 1, "12.50")], at(REPORT_DAY, 8))
    sale_recorder("Kofi", "Basic 4", [(book, 3, "5.00")], at(REPORT_DAY, 17))

    assert reporting.get_today_total(db, today=REPORT_DAY, tz=UTC) == Decimal("27.50")
    assert reporting.get_all_time_total(db) == Decimal("47.50")


def test_totals_are_zero_on_an_empty_ledger(db):
    assert reporting.get_today_total(db) == Decimal("0")
    assert reporting.get_all_time_total(db) == Decimal("0")


def test_summary_statistics(db, book_factory, sale_recorder):
    reader = book_factory(title="Reader", stock=50)
    atlas = book_factory(title="Atlas", stock=50)

    sale_recorder("Ama", "Basic 2", [(reader, 2, "10.00"), (atlas, 1, "20.00")], at(REPORT_DAY, 9))
    sale_recorder("Esi", "Basic 3", [(reader, 1, "10.00")], at(REPORT_DAY, 10))

    summary = reporting.summarize(db, REPORT_DAY, REPORT_DAY, tz=UTC)

    assert summary["total_sales"] == Decimal("50.00")
    assert summary["total_transactions"] == 2
    assert summary["total_books"] == 4
    assert summary["average_transaction_value"] == Decimal("25.00")


# =========================================================
# STUDENT SUMMARIES
# =========================================================
def test_student_summaries_group_by_name_and_class(db, book_factory, sale_recorder):
    reader = book_factory(title="Reader", stock=50)
    atlas = book_factory(title="Atlas", stock=50)

    sale_recorder("Ama", "Basic 2", [(reader, 3, "10.00")], at(REPORT_DAY, 9))
    sale_recorder("Ama", "Basic 2", [(reader, 1, "5.00"), (atlas, 1, "10.00")], at(REPORT_DAY, 11))
    sale_recorder("Ama", "Basic 5", [(atlas, 1, "20.00")], at(REPORT_DAY, 8))

    summaries = reporting.get_student_summaries(db)

    assert len(summaries) == 2
    ama_basic_2 = summaries[0]
    assert ama_basic_2["name"] == "Ama"
    assert ama_basic_2["class_level"] == "Basic 2"
    assert ama_basic_2["total_spent"] == Decimal("45.00")
    assert ama_basic_2["purchase_count"] == 2
    assert ama_basic_2["book_count"] == 5
    assert ama_basic_2["last_purchase"].replace(tzinfo=None) == datetime(2026, 3, 10, 11, 0)

    assert summaries[1]["class_level"] == "Basic 5"
    assert summaries[1]["book_count"] == 1


def test_student_summaries_can_be_filtered(db, book_factory, sale_recorder):
    book = book_factory(stock=50)

    sale_recorder("Ama Mensah", "Basic 2", [(book, 1, "10.00")], at(REPORT_DAY, 9))
    sale_recorder("Kofi Boateng", "Basic 4", [(book, 1, "10.00")], at(REPORT_DAY, 10))

    assert [s["name"] for s in reporting.get_student_summaries(db, search="mensah")] == ["Ama Mensah"]
    assert [s["name"] for s in reporting.get_student_summaries(db, class_level="Basic 4")] == ["Kofi Boateng"]


def test_student_search_treats_wildcards_literally(db, book_factory, sale_recorder):
    book = book_factory(stock=50)

    sale_recorder("Ama_Mensah", "Basic 2", [(book, 1, "10.00")], at(REPORT_DAY, 9))
    sale_recorder("Ama Mensah", "Basic 2", [(book, 1, "10.00")], at(REPORT_DAY, 10))
    sale_recorder("Esi 100% Reader", "Basic 3", [(book, 1, "10.00")], at(REPORT_DAY, 11))

    assert [s["name"] for s in reporting.get_student_summaries(db, search="a_m")] == ["Ama_Mensah"]
    assert [s["name"] for s in reporting.get_student_summaries(db, search="%")] == ["Esi 100% Reader"]
    assert reporting.get_student_summaries(db, search="Ama%Mensah") == []
