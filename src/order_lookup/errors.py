"""
Order Lookup - Error Classes

Custom exceptions for the lookup engine:
- InvalidInput: unsupported contact type (HTTP 400)
- UpstreamError: Shopify API failures (internal only)
- LookupFailed: generic wrapper surfaced to callers (HTTP 500)
- OrderNotFound: no order matches an order number (HTTP 404)
"""


class InvalidInput(Exception):
    """Raised when a lookup request carries an unsupported contact type."""
    pass


class UpstreamError(Exception):
    """Raised when the Shopify API fails or returns a malformed payload."""
    pass


class LookupFailed(Exception):
    """Raised to callers when a lookup could not be completed."""
    pass


class OrderNotFound(Exception):
    """Raised when no order matches the requested order number."""
    pass
