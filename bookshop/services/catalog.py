# =========================================================
# CATALOG STORE
#
# Book CRUD plus the derived low-stock view. Stock and price
# edits are validated here before anything is written.
# =========================================================

import logging
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookshop.core.errors import NotFound, StorageError, ValidationError
from bookshop.models.books import Book
from bookshop.schemas.book import BookCreate

logger = logging.getLogger("bookshop.catalog")


def _commit(db: Session, action: str):
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Catalog write failed: %s", action)
        raise StorageError(f"Unable to {action}")


def get_book(db: Session, book_id: int) -> Book:
    book = db.query(Book).filter(Book.id == book_id).first()

    if book is None:
        raise NotFound(f"Book with ID {book_id} not found")

    return book


def list_books(db: Session) -> list[Book]:
    return (
        db.query(Book)
        .order_by(Book.created_at.desc(), Book.id.desc())
        .all()
    )


def create_book(db: Session, book_data: BookCreate) -> Book:
    book = Book(
        title=book_data.title.strip(),
        subject=book_data.subject.strip(),
        class_level=book_data.class_level,
        price=book_data.price,
        stock=book_data.stock,
    )

    db.add(book)
    _commit(db, "create book")
    db.refresh(book)

    logger.info("Created book %s (%s, %s)", book.id, book.title, book.class_level)
    return book


def update_stock(db: Session, book_id: int, stock: int) -> Book:
    if stock is None or stock < 0:
        raise ValidationError("Stock cannot be negative")

    book = get_book(db, book_id)
    book.stock = stock

    _commit(db, "update book stock")
    db.refresh(book)

    return book


def update_price(db: Session, book_id: int, price: Decimal) -> Book:
    if price is None or price <= 0:
        raise ValidationError("Price must be greater than zero")

    book = get_book(db, book_id)
    book.price = price

    _commit(db, "update book price")
    db.refresh(book)

    return book


def delete_book(db: Session, book_id: int) -> None:
    # Sale items keep their book_id and snapshot fields
    book = get_book(db, book_id)

    db.delete(book)
    _commit(db, "delete book")

    logger.info("Deleted book %s", book_id)


def low_stock_books(db: Session, threshold: int) -> list[Book]:
    return (
        db.query(Book)
        .filter(Book.stock < threshold)
        .order_by(Book.stock.asc(), Book.title.asc())
        .all()
    )


def total_books_in_stock(db: Session) -> int:
    return db.query(func.coalesce(func.sum(Book.stock), 0)).scalar() or 0
