"""
Upstream Clients

HTTP clients for the Shopify Admin API.
"""

from order_lookup.clients.shopify_client import ShopifyClient

__all__ = [
    "ShopifyClient",
]
