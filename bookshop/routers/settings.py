# bookshop/routers/settings.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookshop.database import get_db
from bookshop.core.auth import get_current_user
from bookshop.core.store import (
    StoreContext,
    get_store_context,
    update_store_context,
)
from bookshop.schemas.store_settings import (
    StoreSettingsResponse,
    StoreSettingsUpdate,
)

router = APIRouter(
    prefix="/settings",
    tags=["Settings"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=StoreSettingsResponse)
def get_settings(store: StoreContext = Depends(get_store_context)):
    return store


@router.put("", response_model=StoreSettingsResponse)
def update_settings(
    settings_data: StoreSettingsUpdate,
    db: Session = Depends(get_db),
):
    return update_store_context(
        db,
        store_name=settings_data.store_name,
        currency=settings_data.currency,
        low_stock_threshold=settings_data.low_stock_threshold,
    )
