"""
Order Lookup

Looks up a shop's order history by customer email or phone against the
Shopify Admin API, normalizes it into OrderSummary records and caches the
results.
"""

from order_lookup.errors import (
    InvalidInput,
    LookupFailed,
    OrderNotFound,
    UpstreamError,
)
from order_lookup.models import LookupTask, OrderSummary
from order_lookup.orchestrator import OrderLookupOrchestrator

__all__ = [
    "InvalidInput",
    "LookupFailed",
    "OrderNotFound",
    "UpstreamError",
    "LookupTask",
    "OrderSummary",
    "OrderLookupOrchestrator",
]
