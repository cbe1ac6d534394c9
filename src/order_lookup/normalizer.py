"""
Order Normalizer

Maps the two upstream order shapes onto OrderSummary:

- REST (orders.json): flat fields, fulfillments carry tracking directly.
- Graph (GraphQL): money in *PriceSet.shopMoney, line items as
  edges/node, tracking nested under fulfillments[].trackingInfo[].

Pure functions, no I/O.
"""

from typing import Any, Dict, List, Optional

from order_lookup.models import (
    DEFAULT_FULFILLMENT_STATUS,
    LineItem,
    OrderSummary,
    TrackingInfo,
)


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _quantity(value: Any) -> int:
    return int(value or 0)


# ============================================================================
# REST shape
# ============================================================================

def _rest_tracking(order: Dict[str, Any]) -> Optional[TrackingInfo]:
    fulfillments = order.get("fulfillments") or []
    if not fulfillments:
        return None
    first = fulfillments[0]
    return TrackingInfo(
        number=first.get("tracking_number"),
        company=first.get("tracking_company"),
        url=first.get("tracking_url"),
    )


def normalize_rest_order(order: Dict[str, Any]) -> OrderSummary:
    """Normalize an order from the REST listing."""
    line_items = [
        LineItem(
            title=item.get("title"),
            quantity=_quantity(item.get("quantity")),
            price=_as_str(item.get("price")),
        )
        for item in order.get("line_items") or []
    ]

    return OrderSummary(
        order_number=_as_str(order.get("order_number")) or "",
        created_at=order.get("created_at") or "",
        total_price=_as_str(order.get("total_price")) or "0.00",
        currency_code=order.get("currency"),
        fulfillment_status=order.get("fulfillment_status") or DEFAULT_FULFILLMENT_STATUS,
        items_count=sum(item.quantity for item in line_items),
        shipping_address=order.get("shipping_address"),
        tracking_info=_rest_tracking(order),
        line_items=line_items,
    )


def normalize_rest_orders(orders: List[Dict[str, Any]]) -> List[OrderSummary]:
    return [normalize_rest_order(order) for order in orders]


# ============================================================================
# Graph shape
# ============================================================================

def _shop_money(price_set: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not price_set:
        return {}
    return price_set.get("shopMoney") or {}


def _edges(connection: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not connection:
        return []
    return [edge.get("node") or {} for edge in connection.get("edges") or []]


def _graph_tracking(order: Dict[str, Any]) -> Optional[TrackingInfo]:
    fulfillments = order.get("fulfillments") or []
    if not fulfillments:
        return None
    tracking = fulfillments[0].get("trackingInfo") or []
    if not tracking:
        return None
    first = tracking[0]
    return TrackingInfo(
        number=first.get("number"),
        company=first.get("company"),
        url=first.get("url"),
    )


def _graph_fulfillment_status(order: Dict[str, Any]) -> str:
    # GraphQL enums (FULFILLED, PARTIALLY_FULFILLED) to REST vocabulary
    status = order.get("displayFulfillmentStatus")
    if not status:
        return DEFAULT_FULFILLMENT_STATUS
    return str(status).lower()


def _graph_address(address: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not address:
        return None
    return {
        "name": address.get("name"),
        "address1": address.get("address1"),
        "address2": address.get("address2"),
        "city": address.get("city"),
        "province": address.get("province"),
        "zip": address.get("zip"),
        "country": address.get("country"),
        "phone": address.get("phone"),
    }


def _order_number(name: Any) -> str:
    # GraphQL exposes the display name ("#1001"); REST exposes 1001
    text = _as_str(name) or ""
    return text.lstrip("#")


def normalize_graph_order(order: Dict[str, Any]) -> OrderSummary:
    """Normalize an order node from a GraphQL customer query."""
    line_items = []
    for node in _edges(order.get("lineItems")):
        unit_price = _shop_money(node.get("originalUnitPriceSet"))
        line_items.append(LineItem(
            title=node.get("title"),
            quantity=_quantity(node.get("quantity")),
            price=_as_str(unit_price.get("amount")),
        ))

    total = _shop_money(order.get("totalPriceSet"))

    return OrderSummary(
        order_number=_order_number(order.get("name")),
        created_at=order.get("createdAt") or "",
        total_price=_as_str(total.get("amount")) or "0.00",
        currency_code=total.get("currencyCode"),
        fulfillment_status=_graph_fulfillment_status(order),
        items_count=sum(item.quantity for item in line_items),
        shipping_address=_graph_address(order.get("shippingAddress")),
        tracking_info=_graph_tracking(order),
        line_items=line_items,
        customer_name=order.get("customer_name"),
        customer_email=order.get("customer_email"),
    )


def normalize_graph_orders(orders: List[Dict[str, Any]]) -> List[OrderSummary]:
    return [normalize_graph_order(order) for order in orders]
