"""
Data structures for the order lookup engine.

OrderSummary is the canonical order record returned to callers, whatever
upstream shape it was built from.
"""
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple

CONTACT_EMAIL = "email"
CONTACT_PHONE = "phone"
CONTACT_TYPES = (CONTACT_EMAIL, CONTACT_PHONE)

DEFAULT_FULFILLMENT_STATUS = "unfulfilled"

# Single-order lookups by order number
ORDER_DETAILS = "order_details"


@dataclass(frozen=True)
class LineItem:
    title: Optional[str]
    quantity: int
    price: Optional[str]


@dataclass(frozen=True)
class TrackingInfo:
    """
    Shipment tracking for an order.

    Always carries all three keys; sub-fields may be None when the
    fulfillment exists but has no tracking details.
    """
    number: Optional[str] = None
    company: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class OrderSummary:
    """
    Canonical order record.

    Attributes:
        order_number: Shop-facing order number (as a string)
        created_at: ISO-8601 creation timestamp
        total_price: Decimal string, e.g. "19.99"
        fulfillment_status: Lower-case status, "unfulfilled" when absent
        items_count: Sum of line item quantities
        line_items: Ordered line items
        tracking_info: First available tracking, or None
        customer_name / customer_email: Only set by phone lookups
    """
    order_number: str
    created_at: str
    total_price: str
    currency_code: Optional[str] = None
    fulfillment_status: str = DEFAULT_FULFILLMENT_STATUS
    items_count: int = 0
    shipping_address: Optional[Dict[str, Any]] = None
    tracking_info: Optional[TrackingInfo] = None
    line_items: Tuple[LineItem, ...] = field(default_factory=tuple)
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None

    def __post_init__(self):
        """Validate items_count against line items."""
        object.__setattr__(self, "line_items", tuple(self.line_items))
        expected = sum(item.quantity for item in self.line_items)
        if self.items_count != expected:
            raise ValueError(
                f"items_count must equal the sum of line item quantities "
                f"({self.items_count} != {expected})"
            )
        if any(item.quantity < 0 for item in self.line_items):
            raise ValueError("Line item quantity cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable dict; customer fields omitted when unset."""
        data = asdict(self)
        data["line_items"] = list(data["line_items"])
        if self.customer_name is None:
            data.pop("customer_name")
        if self.customer_email is None:
            data.pop("customer_email")
        return data


@dataclass(frozen=True)
class LookupTask:
    """A single lookup handed to the coordinator: a contact or an order number."""
    type: str
    contact: str

    @property
    def cache_key(self) -> str:
        return make_cache_key(self.type, self.contact)


def make_cache_key(contact_type: str, contact_info: str) -> str:
    """Exact, case-sensitive cache key for a contact."""
    return f"{contact_type}:{contact_info}"
