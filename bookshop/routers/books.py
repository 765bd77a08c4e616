# bookshop/routers/books.py

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from bookshop.database import get_db
from bookshop.core.auth import get_current_user
from bookshop.core.constants import MAX_DB_INT
from bookshop.core.store import StoreContext, get_store_context
from bookshop.services import catalog
from bookshop.schemas.book import (
    BookCreate,
    BookPriceUpdate,
    BookResponse,
    BookStockUpdate,
)

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=list[BookResponse])
def list_books(db: Session = Depends(get_db)):
    return catalog.list_books(db)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_book(
    book_data: BookCreate,
    db: Session = Depends(get_db),
):
    return catalog.create_book(db, book_data)


@router.get("/low-stock", response_model=list[BookResponse])
def list_low_stock_books(
    db: Session = Depends(get_db),
    store: StoreContext = Depends(get_store_context),
):
    return catalog.low_stock_books(db, store.low_stock_threshold)


@router.get("/{book_id}", response_model=BookResponse)
def get_book(book_id: int = Path(..., le=MAX_DB_INT), db: Session = Depends(get_db)):
    return catalog.get_book(db, book_id)


@router.patch("/{book_id}/stock", response_model=BookResponse)
def update_book_stock(
    stock_data: BookStockUpdate,
    book_id: int = Path(..., le=MAX_DB_INT),
    db: Session = Depends(get_db),
):
    return catalog.update_stock(db, book_id, stock_data.stock)


@router.patch("/{book_id}/price", response_model=BookResponse)
def update_book_price(
    price_data: BookPriceUpdate,
    book_id: int = Path(..., le=MAX_DB_INT),
    db: Session = Depends(get_db),
):
    return catalog.update_price(db, book_id, price_data.price)


@router.delete("/{book_id}")
def delete_book(
    book_id: int = Path(..., le=MAX_DB_INT),
    db: Session = Depends(get_db),
):
    catalog.delete_book(db, book_id)

    return {"message": "Book deleted successfully"}
