# =========================================================
# SALE TRANSACTION SERVICE
#
# create_sale is all-or-nothing:
# - every input check runs before the first write
# - prices come from the catalog, never from the client
# - the student, the sale, its items and every stock
#   decrement commit in one database transaction
# - each decrement is conditional (stock >= quantity), so a
#   competing sale that consumed the units first makes this
#   one fail with InsufficientStock instead of overselling
# =========================================================

import logging
from decimal import Decimal

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from bookshop.core.errors import (
    BookshopError,
    InsufficientStock,
    NotFound,
    StorageError,
    ValidationError,
)
from bookshop.models.books import Book
from bookshop.models.sale_items import SaleItem
from bookshop.models.sales import Sale
from bookshop.models.students import Student
from bookshop.schemas.sale import SaleCreate, SaleItemCreate
from bookshop.services import students as student_service

logger = logging.getLogger("bookshop.sales")


def populated_sale_options():
    """Loader options that resolve the student and every line item's book."""
    return (
        joinedload(Sale.student),
        selectinload(Sale.items).joinedload(SaleItem.book),
    )


def get_sale(db: Session, sale_id: int) -> Sale:
    sale = (
        db.query(Sale)
        .options(*populated_sale_options())
        .filter(Sale.id == sale_id)
        .first()
    )

    if sale is None:
        raise NotFound(f"Sale with ID {sale_id} not found")

    return sale


def _find_by_request_id(db: Session, request_id: str) -> Sale | None:
    return (
        db.query(Sale)
        .options(*populated_sale_options())
        .filter(Sale.request_id == request_id)
        .first()
    )


# =========================================================
# VALIDATION (NO WRITES)
# =========================================================
def _validate_cart(sale_data: SaleCreate):
    if sale_data.student_id is None:
        student_service.validate_student_fields(
            sale_data.student_name,
            sale_data.student_class,
        )

    if not sale_data.items:
        raise ValidationError("Sale must contain at least one item")

    book_ids = [item.book_id for item in sale_data.items]
    if len(book_ids) != len(set(book_ids)):
        raise ValidationError("Each book may appear only once in a sale")

    for item in sale_data.items:
        if item.quantity is None or item.quantity <= 0:
            raise ValidationError("Item quantity must be greater than zero")


def _resolve_student(
    db: Session,
    sale_data: SaleCreate,
    deduplicate: bool,
) -> Student:
    if sale_data.student_id is not None:
        return student_service.get_student(db, sale_data.student_id)

    name, class_level = student_service.validate_student_fields(
        sale_data.student_name,
        sale_data.student_class,
    )

    if deduplicate:
        existing = student_service.find_student(db, name, class_level)
        if existing is not None:
            return existing

    # Not added to the session until the sale commits
    return Student(name=name, class_level=class_level)


def _load_cart_books(db: Session, items: list[SaleItemCreate]) -> dict[int, Book]:
    book_ids = [item.book_id for item in items]

    books = {
        book.id: book
        for book in db.query(Book).filter(Book.id.in_(book_ids)).all()
    }

    for book_id in book_ids:
        if book_id not in books:
            raise NotFound(f"Book with ID {book_id} not found")

    return books


def _price_cart(
    items: list[SaleItemCreate],
    books: dict[int, Book],
) -> tuple[list[SaleItem], Decimal]:
    total_amount = Decimal("0.00")
    sale_items = []

    for item in items:
        book = books[item.book_id]

        if book.stock < item.quantity:
            raise InsufficientStock(book.id, book.title, item.quantity, book.stock)

        price_at_sale = Decimal(book.price)
        line_total = price_at_sale * item.quantity
        total_amount += line_total

        sale_items.append(
            SaleItem(
                book_id=book.id,
                quantity=item.quantity,
                price_at_sale=price_at_sale,
                title_at_sale=book.title,
                line_total=line_total,
            )
        )

    return sale_items, total_amount


# =========================================================
# ATOMIC STOCK DECREMENT
# =========================================================
def _decrement_stock(db: Session, book: Book, quantity: int):
    result = db.execute(
        update(Book)
        .where(Book.id == book.id, Book.stock >= quantity)
        .values(stock=Book.stock - quantity)
        .execution_options(synchronize_session=False)
    )

    if result.rowcount == 0:
        available = db.query(Book.stock).filter(Book.id == book.id).scalar()

        if available is None:
            raise NotFound(f"Book with ID {book.id} not found")

        raise InsufficientStock(book.id, book.title, quantity, available)


# =========================================================
# CREATE SALE
# =========================================================
def create_sale(
    db: Session,
    sale_data: SaleCreate,
    deduplicate_students: bool = False,
) -> Sale:
    _validate_cart(sale_data)

    # Double-submit protection
    if sale_data.request_id:
        existing_sale = _find_by_request_id(db, sale_data.request_id)
        if existing_sale:
            logger.info("Sale for request %s already recorded as %s", sale_data.request_id, existing_sale.id)
            return existing_sale

    student = _resolve_student(db, sale_data, deduplicate_students)
    books = _load_cart_books(db, sale_data.items)
    sale_items, total_amount = _price_cart(sale_data.items, books)

    try:
        sale = Sale(
            student=student,
            total_amount=total_amount,
            request_id=sale_data.request_id,
            items=sale_items,
        )
        db.add(sale)
        db.flush()

        # Ascending book id so concurrent sales lock rows in the same order
        for item in sorted(sale_data.items, key=lambda i: i.book_id):
            _decrement_stock(db, books[item.book_id], item.quantity)

        db.commit()

    except BookshopError as exc:
        db.rollback()
        logger.warning("Sale rejected: %s", exc.message)
        raise

    except IntegrityError:
        db.rollback()

        # Lost a race against the same request_id
        if sale_data.request_id:
            existing_sale = _find_by_request_id(db, sale_data.request_id)
            if existing_sale:
                return existing_sale

        logger.exception("Integrity error while recording sale")
        raise StorageError("Unable to complete sale")

    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error while recording sale")
        raise StorageError("Unable to complete sale")

    logger.info(
        "Sale %s recorded for %s (%s): %s item(s), total %s",
        sale.id,
        student.name,
        student.class_level,
        len(sale_items),
        total_amount,
    )

    return get_sale(db, sale.id)
