"""
Order Lookup - Orders API Endpoints

FastAPI endpoints for contact and order-number lookups.
Maps lookup errors to HTTP status codes:
InvalidInput -> 400, OrderNotFound -> 404, LookupFailed -> 500.
"""

import logging
from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from order_lookup.errors import InvalidInput, LookupFailed, OrderNotFound
from order_lookup.orchestrator import OrderLookupOrchestrator

router = APIRouter()
logger = logging.getLogger(__name__)


class OrdersRequest(BaseModel):
    """Request model for /get_orders."""
    contact_type: str
    contact_info: str


class OrderDetailsRequest(BaseModel):
    """Request model for /get_order_details."""
    order_number: Union[int, str]


def get_orchestrator(request: Request) -> OrderLookupOrchestrator:
    return request.app.state.orchestrator


@router.post("/get_orders")
async def get_orders(
    request: OrdersRequest,
    orchestrator: OrderLookupOrchestrator = Depends(get_orchestrator),
) -> List[dict]:
    """Return every order for an email address or phone number."""
    logger.info("Received orders request", extra={"contact_type": request.contact_type})
    try:
        orders = await orchestrator.lookup_async(request.contact_type, request.contact_info)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupFailed as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [order.to_dict() for order in orders]


@router.post("/get_order_details")
def get_order_details(
    request: OrderDetailsRequest,
    orchestrator: OrderLookupOrchestrator = Depends(get_orchestrator),
) -> dict:
    """Return a single order by order number."""
    order_number = str(request.order_number)
    logger.info("Received order details request", extra={"order_number": order_number})
    try:
        order = orchestrator.get_order_details(order_number)
    except OrderNotFound:
        raise HTTPException(status_code=404, detail="Order not found")
    except LookupFailed as e:
        raise HTTPException(status_code=500, detail=str(e))
    return order.to_dict()
