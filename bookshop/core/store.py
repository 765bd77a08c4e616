# =========================================================
# STORE CONTEXT
#
# Store-wide settings (name, currency, low-stock cutoff)
# live in a single store_settings row. Requests receive an
# immutable StoreContext through get_store_context; changes
# go through update_store_context only.
# =========================================================

import logging
from dataclasses import dataclass
from decimal import Decimal

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookshop.database import get_db
from bookshop.core.config import settings
from bookshop.core.constants import CURRENCY_SYMBOLS
from bookshop.core.errors import StorageError
from bookshop.models.store_settings import StoreSetting

logger = logging.getLogger("bookshop.store")


@dataclass(frozen=True)
class StoreContext:
    store_name: str
    currency: str
    low_stock_threshold: int

    @property
    def currency_symbol(self) -> str:
        return CURRENCY_SYMBOLS.get(self.currency, self.currency)

    def format_currency(self, amount) -> str:
        value = Decimal(amount or 0).quantize(Decimal("0.01"))
        return f"{self.currency_symbol}{value}"

    @classmethod
    def from_row(cls, row: StoreSetting) -> "StoreContext":
        return cls(
            store_name=row.store_name,
            currency=row.currency,
            low_stock_threshold=row.low_stock_threshold,
        )


def _get_or_create_row(db: Session) -> StoreSetting:
    row = db.query(StoreSetting).order_by(StoreSetting.id).first()

    if row is None:
        row = StoreSetting(
            store_name=settings.DEFAULT_STORE_NAME,
            currency=settings.DEFAULT_CURRENCY,
            low_stock_threshold=settings.DEFAULT_LOW_STOCK_THRESHOLD,
        )
        db.add(row)
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to create default store settings")
            raise StorageError()
        db.refresh(row)
        logger.info("Created default store settings")

    return row


def load_store_context(db: Session) -> StoreContext:
    return StoreContext.from_row(_get_or_create_row(db))


def update_store_context(
    db: Session,
    store_name: str,
    currency: str,
    low_stock_threshold: int,
) -> StoreContext:
    row = _get_or_create_row(db)

    row.store_name = store_name
    row.currency = currency
    row.low_stock_threshold = low_stock_threshold

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update store settings")
        raise StorageError("Unable to update settings")

    db.refresh(row)

    return StoreContext.from_row(row)


def get_store_context(db: Session = Depends(get_db)) -> StoreContext:
    return load_store_context(db)
