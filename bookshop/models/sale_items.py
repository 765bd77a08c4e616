# models/sale_items.py

from sqlalchemy import CheckConstraint, Column, Integer, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from bookshop.database import Base


class SaleItem(Base):
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, index=True)

    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=False, index=True)

    # No foreign key: books may be deleted while their sales stay on record
    book_id = Column(Integer, nullable=False, index=True)

    quantity = Column(Integer, nullable=False)
    price_at_sale = Column(Numeric(10, 2), nullable=False)
    title_at_sale = Column(String, nullable=False)
    line_total = Column(Numeric(10, 2), nullable=False)

    sale = relationship("Sale", back_populates="items")

    book = relationship(
        "Book",
        primaryjoin="foreign(SaleItem.book_id) == Book.id",
        viewonly=True,
        uselist=False,
    )

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_sale_item_quantity_positive"),
        CheckConstraint("price_at_sale >= 0", name="ck_sale_item_price_non_negative"),
    )
