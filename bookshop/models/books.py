# bookshop/models/books.py

from sqlalchemy import CheckConstraint, Column, Index, Integer, String, Numeric, DateTime
from sqlalchemy.sql import func

from bookshop.database import Base


class Book(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    class_level = Column(String, nullable=False)

    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_books_class_level", "class_level"),
        CheckConstraint(
            "class_level IN ('Basic 1', 'Basic 2', 'Basic 3', 'Basic 4', 'Basic 5', 'Basic 6')",
            name="ck_book_class_level_valid",
        ),
        CheckConstraint("price >= 0", name="ck_book_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_book_stock_non_negative"),
    )
