import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.security import get_optional_shop
from app.db.session import get_db
from app.schemas.status import StoreStatusOut
from app.services.business.status import QUERY_STATUS_POLICY, SESSION_STATUS_POLICY, query_is_open
from app.services.store.open_hours import OpenHoursStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/status", tags=["status"])


@router.get("", response_model=StoreStatusOut)
def get_session_status(
    db: Session = Depends(get_db),
    shop_id: Optional[str] = Depends(get_optional_shop),
):
    """open/closed for the shop in the merchant session."""
    # no authenticated shop, report closed
    if not shop_id:
        return StoreStatusOut(isOpen=False)

    schedule = OpenHoursStore(db).get_all(shop_id)
    return StoreStatusOut(isOpen=query_is_open(schedule, SESSION_STATUS_POLICY))


@router.get("/shop", response_model=StoreStatusOut)
def get_shop_status(
    shop: Optional[str] = Query(None, description="Shop identifier, e.g. demo.myshopify.com"),
    db: Session = Depends(get_db),
):
    """open/closed for the shop named in the query string."""
    if not shop:
        return StoreStatusOut(isOpen=False)

    schedule = OpenHoursStore(db).get_all(shop)
    is_open = query_is_open(schedule, QUERY_STATUS_POLICY)
    logger.debug(f"Status for {shop}: {'open' if is_open else 'closed'}")
    return StoreStatusOut(isOpen=is_open)
