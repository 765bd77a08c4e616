# models/sales.py

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import relationship

from bookshop.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)

    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)

    total_amount = Column(Numeric(10, 2), nullable=False)

    # Python-side default keeps sub-second ordering on SQLite
    created_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
        index=True,
    )

    # Client-supplied key for double-submit protection
    request_id = Column(String, nullable=True)

    student = relationship("Student", back_populates="sales")

    items = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="SaleItem.id",
    )

    __table_args__ = (
        UniqueConstraint("request_id", name="uq_sales_request_id"),
    )
