"""Order endpoints for the lessonhub API."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from lessonhub.server.db import Storage, get_storage
from lessonhub.server.models import OrderCreateResponse
from lessonhub.server.repository import OrderRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_order_repository(storage: Storage = Depends(get_storage)) -> OrderRepository:
    return OrderRepository(storage.orders)


@router.post("", response_model=OrderCreateResponse, status_code=201)
async def create_order(
    order: Dict[str, Any] = Body(...),
    repo: OrderRepository = Depends(get_order_repository),
) -> OrderCreateResponse:
    """Store an order exactly as the client sent it."""
    order_id = await repo.insert(order)
    logger.info("Order saved: %s", order_id)
    return OrderCreateResponse(message="Order saved successfully", orderId=order_id)
