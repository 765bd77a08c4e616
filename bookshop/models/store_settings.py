# bookshop/models/store_settings.py

from sqlalchemy import CheckConstraint, Column, Integer, String, DateTime
from sqlalchemy.sql import func

from bookshop.database import Base


class StoreSetting(Base):
    __tablename__ = "store_settings"

    __table_args__ = (
        CheckConstraint(
            "currency IN ('GHS', 'USD', 'EUR')",
            name="ck_store_currency_valid",
        ),
        CheckConstraint(
            "low_stock_threshold >= 0",
            name="ck_store_low_stock_non_negative",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)

    store_name = Column(String, nullable=False)
    currency = Column(String, nullable=False)
    low_stock_threshold = Column(Integer, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
