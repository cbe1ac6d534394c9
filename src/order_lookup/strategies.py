"""
Lookup Strategies

search_by_email walks the REST order listing page by page.
search_by_phone resolves customers by phone, then pulls each customer's
orders through GraphQL.

Both fail as a whole with UpstreamError; partial results are never
returned.
"""

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from order_lookup.clients.shopify_client import ShopifyClient
from order_lookup.errors import OrderNotFound, UpstreamError
from order_lookup.models import OrderSummary
from order_lookup.normalizer import (
    normalize_graph_orders,
    normalize_rest_order,
    normalize_rest_orders,
)

logger = logging.getLogger(__name__)

PAGE_LIMIT = 250
DEFAULT_MAX_PAGES = 200

# Fields the REST normalizer reads
REST_ORDER_FIELDS = (
    "id,order_number,created_at,total_price,currency,fulfillment_status,"
    "line_items,shipping_address,fulfillments,email,phone"
)

CUSTOMERS_BY_PHONE_QUERY = """
query customersByPhone($query: String!) {
  customers(first: 250, query: $query) {
    edges {
      node {
        id
        firstName
        lastName
        email
      }
    }
  }
}
"""

CUSTOMER_ORDERS_QUERY = """
query customerOrders($id: ID!) {
  customer(id: $id) {
    orders(first: 250) {
      edges {
        node {
          name
          createdAt
          displayFulfillmentStatus
          totalPriceSet { shopMoney { amount currencyCode } }
          shippingAddress {
            name address1 address2 city province zip country phone
          }
          fulfillments { trackingInfo { number company url } }
          lineItems(first: 250) {
            edges {
              node {
                title
                quantity
                originalUnitPriceSet { shopMoney { amount currencyCode } }
              }
            }
          }
        }
      }
    }
  }
}
"""


def _edge_nodes(connection: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not isinstance(connection, dict):
        raise UpstreamError("Invalid GraphQL response: missing connection")
    return [edge.get("node") or {} for edge in connection.get("edges") or []]


def _parse_timestamp(value: Optional[str]) -> datetime:
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_phone(phone: str) -> str:
    """Strip everything but digits."""
    return re.sub(r"\D", "", phone or "")


def lookback_start(days: int, now: Optional[datetime] = None) -> Optional[str]:
    """ISO timestamp N days back, or None when the window is disabled."""
    if days <= 0:
        return None
    now = now or datetime.now(timezone.utc)
    return (now - timedelta(days=days)).isoformat()


# ============================================================================
# Email
# ============================================================================

def search_by_email(
    client: ShopifyClient,
    email: str,
    max_pages: int = DEFAULT_MAX_PAGES,
    created_at_min: Optional[str] = None,
) -> List[OrderSummary]:
    """
    Collect every order for an email address.

    Follows the Link header cursor until the last page. Follow-up pages
    carry limit, page_info and the field projection; the cursor already
    encodes the original filters.

    Raises:
        UpstreamError: On any page failure, or when more than max_pages
            pages would be needed
    """
    params: Dict[str, Any] = {
        "status": "any",
        "email": email,
        "limit": PAGE_LIMIT,
        "fields": REST_ORDER_FIELDS,
    }
    if created_at_min:
        params["created_at_min"] = created_at_min

    raw_orders: List[Dict[str, Any]] = []
    pages = 0
    while True:
        if pages >= max_pages:
            raise UpstreamError(
                f"Pagination limit reached after {pages} pages"
            )
        orders, next_token = client.fetch_orders_page(params)
        pages += 1
        raw_orders.extend(orders)
        if next_token is None:
            break
        params = {
            "limit": PAGE_LIMIT,
            "page_info": next_token,
            "fields": REST_ORDER_FIELDS,
        }

    logger.info(
        "Email search complete",
        extra={"pages": pages, "orders_count": len(raw_orders)}
    )
    return normalize_rest_orders(raw_orders)


# ============================================================================
# Phone
# ============================================================================

def _customer_name(customer: Dict[str, Any]) -> Optional[str]:
    parts = [customer.get("firstName"), customer.get("lastName")]
    name = " ".join(p for p in parts if p)
    return name or None


def _customer_orders(client: ShopifyClient, customer: Dict[str, Any]) -> List[Dict[str, Any]]:
    data = client.run_graph_query(CUSTOMER_ORDERS_QUERY, {"id": customer.get("id")})
    customer_node = data.get("customer")
    if not customer_node:
        return []

    name = _customer_name(customer)
    email = customer.get("email")
    orders = []
    for order in _edge_nodes(customer_node.get("orders")):
        tagged = dict(order)
        tagged["customer_name"] = name
        tagged["customer_email"] = email
        orders.append(tagged)
    return orders


def search_by_phone(client: ShopifyClient, phone: str) -> List[OrderSummary]:
    """
    Collect orders for every customer whose phone matches.

    Customers are matched once (first 250, no pagination), then each
    customer's orders are fetched one customer at a time. The combined
    list is sorted newest first; ties keep customer-then-order order.

    Raises:
        UpstreamError: If the customer query or any orders query fails
    """
    digits = normalize_phone(phone)
    if not digits:
        logger.info("Phone search skipped: no digits in contact")
        return []

    data = client.run_graph_query(CUSTOMERS_BY_PHONE_QUERY, {"query": f"phone:{digits}"})
    customers = _edge_nodes(data.get("customers"))
    logger.info("Phone search matched customers", extra={"customers_count": len(customers)})

    raw_orders: List[Dict[str, Any]] = []
    for customer in customers:
        raw_orders.extend(_customer_orders(client, customer))

    raw_orders.sort(key=lambda o: _parse_timestamp(o.get("createdAt")), reverse=True)
    return normalize_graph_orders(raw_orders)


# ============================================================================
# Order number
# ============================================================================

def find_order_by_number(client: ShopifyClient, order_number: str) -> OrderSummary:
    """
    Fetch a single order by its order number.

    Raises:
        OrderNotFound: If no order matches
        UpstreamError: On upstream failure
    """
    orders, _ = client.fetch_orders_page({"name": order_number, "status": "any"})
    if not orders:
        raise OrderNotFound(f"Order {order_number} not found")
    return normalize_rest_order(orders[0])
