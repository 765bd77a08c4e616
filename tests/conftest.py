"""Shared pytest fixtures for the bookshop API tests."""

import os
import tempfile
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

# Settings are read at import time, so the environment must be ready first.
_TEST_DIR = Path(tempfile.mkdtemp(prefix="bookshop-tests-"))
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DIR / 'bookshop.db'}"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["REPORT_TIMEZONE"] = "UTC"

from fastapi.testclient import TestClient  # noqa: E402

from bookshop.main import app  # noqa: E402
from bookshop.database import Base, SessionLocal, engine  # noqa: E402
from bookshop.core.hashing import hash_password  # noqa: E402
from bookshop.core.jwt import create_access_token  # noqa: E402
from bookshop.models.sale_items import SaleItem  # noqa: E402
from bookshop.models.sales import Sale  # noqa: E402
from bookshop.models.students import Student  # noqa: E402
from bookshop.models.users import User  # noqa: E402
from bookshop.schemas.book import BookCreate  # noqa: E402
from bookshop.services import catalog  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test an empty schema."""

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db(reset_database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(reset_database):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user(db):
    account = User(
        name="admin",
        email="admin@example.com",
        password_hash=hash_password("bookshop-pass-1"),
    )
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


@pytest.fixture
def auth_headers(user):
    token = create_access_token({"sub": str(user.id), "name": user.name, "email": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def book_factory(db):
    """Create books through the catalog service."""

    def _create(
        title="English Reader",
        subject="English",
        class_level="Basic 2",
        price="10.00",
        stock=5,
    ):
        return catalog.create_book(
            db,
            BookCreate(
                title=title,
                subject=subject,
                class_level=class_level,
                price=Decimal(price),
                stock=stock,
            ),
        )

    return _create


@pytest.fixture
def sale_recorder(db):
    """Write a sale straight into the ledger with a chosen timestamp.

    ``lines`` is a list of (book, quantity, price) tuples.
    """

    def _record(name, class_level, lines, created_at=None):
        student = Student(name=name, class_level=class_level)
        items = []
        total = Decimal("0.00")

        for book, quantity, price in lines:
            price = Decimal(price)
            total += price * quantity
            items.append(
                SaleItem(
                    book_id=book.id,
                    quantity=quantity,
                    price_at_sale=price,
                    title_at_sale=book.title,
                    line_total=price * quantity,
                )
            )

        sale = Sale(
            student=student,
            items=items,
            total_amount=total,
            created_at=created_at or datetime.now(timezone.utc),
        )
        db.add(sale)
        db.commit()
        db.refresh(sale)
        return sale

    return _record
