"""Failure simulation routes for the mock POS"""

import logging

from fastapi import APIRouter, Depends

from ..models import AvailabilityRequest
from ..store import PosStateStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.put("/availability")
async def set_availability(
    request: AvailabilityRequest,
    store: PosStateStore = Depends(get_store),
):
    """Toggle simulated outages"""
    store.online = request.online
    store.success = request.success
    logger.info(f"Availability set: online={store.online}, success={store.success}")
    return {"online": store.online, "success": store.success}


@router.post("/reset")
async def reset(store: PosStateStore = Depends(get_store)):
    """Restore the empty cart, idle payment and normal availability"""
    store.reset()
    return {"status": "reset"}
