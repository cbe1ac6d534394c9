"""
Shared fixtures for order lookup tests.

Provides factories for upstream order payloads in both shapes
(REST orders.json and GraphQL customer orders).
"""

import pytest


@pytest.fixture
def rest_order():
    """Factory for REST-shaped orders."""
    def _make(order_number=1001, created_at="2024-01-01T10:00:00Z",
              quantities=(1,), fulfillments=None, fulfillment_status=None):
        return {
            "id": order_number * 10,
            "order_number": order_number,
            "created_at": created_at,
            "total_price": "25.00",
            "currency": "USD",
            "fulfillment_status": fulfillment_status,
            "shipping_address": {"address1": "1 Main St", "city": "Springfield"},
            "fulfillments": fulfillments if fulfillments is not None else [],
            "line_items": [
                {"title": f"Item {i}", "quantity": q, "price": "5.00"}
                for i, q in enumerate(quantities)
            ],
        }
    return _make


@pytest.fixture
def graph_order():
    """Factory for GraphQL order nodes."""
    def _make(name="#1001", created_at="2024-01-01T10:00:00Z",
              quantities=(1,), fulfillments=None, status="FULFILLED"):
        return {
            "name": name,
            "createdAt": created_at,
            "displayFulfillmentStatus": status,
            "totalPriceSet": {"shopMoney": {"amount": "25.0", "currencyCode": "USD"}},
            "shippingAddress": {"address1": "1 Main St", "city": "Springfield"},
            "fulfillments": fulfillments if fulfillments is not None else [],
            "lineItems": {
                "edges": [
                    {"node": {
                        "title": f"Item {i}",
                        "quantity": q,
                        "originalUnitPriceSet": {
                            "shopMoney": {"amount": "5.0", "currencyCode": "USD"}
                        },
                    }}
                    for i, q in enumerate(quantities)
                ]
            },
        }
    return _make
