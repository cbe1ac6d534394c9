"""
Shopify Admin API Client

Thin client for the two query mechanisms used by order lookups:
- paginated REST order listing (orders.json, cursor in the Link header)
- GraphQL queries (graphql.json)

No retries at this layer; every failure surfaces as UpstreamError.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from order_lookup.clients.base_client import BaseClient
from order_lookup.config import ServiceConfig
from order_lookup.errors import UpstreamError

logger = logging.getLogger(__name__)

ORDERS_PATH = "/orders.json"
GRAPHQL_PATH = "/graphql.json"


class ShopifyClient(BaseClient):
    """HTTP client for the Shopify Admin API."""

    def __init__(
        self,
        base_url: str,
        access_token: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize Shopify client.

        Args:
            base_url: Admin API base URL, e.g.
                https://my-store.myshopify.com/admin/api/2023-04
            access_token: Static access token (X-Shopify-Access-Token)
            timeout: Per-call timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        if not access_token:
            raise ValueError("Shopify access token is required")
        super().__init__(
            base_url=base_url,
            headers={
                "Content-Type": "application/json",
                "X-Shopify-Access-Token": access_token,
            },
            timeout=timeout,
            transport=transport
        )

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "ShopifyClient":
        return cls(
            base_url=config.shopify_base_url,
            access_token=config.ACCESS_TOKEN or "",
            timeout=config.TIMEOUT_SECONDS,
        )

    def fetch_orders_page(
        self, params: Dict[str, Any]
    ) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """
        Fetch one page of orders from the REST listing.

        Args:
            params: Query parameters (filters on the first page,
                limit + page_info on follow-up pages)

        Returns:
            (orders, next_page_token). The token is the page_info of the
            rel="next" entry in the Link header, or None on the last page.

        Raises:
            UpstreamError: On HTTP errors or a body without an orders list
        """
        response = self._send("GET", ORDERS_PATH, params=params)
        payload = self._parse_json(response)

        orders = payload.get("orders")
        if not isinstance(orders, list):
            raise UpstreamError("Invalid orders response: missing orders list")

        next_token = _next_page_token(response)
        logger.debug(
            "Fetched orders page",
            extra={"orders_count": len(orders), "has_next": next_token is not None}
        )
        return orders, next_token

    def run_graph_query(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Run a GraphQL query and return its data object.

        Raises:
            UpstreamError: On HTTP errors, GraphQL errors or missing data
        """
        payload = self._request(
            "POST",
            GRAPHQL_PATH,
            json={"query": query, "variables": variables or {}}
        )

        errors = payload.get("errors")
        if errors:
            raise UpstreamError(f"GraphQL query failed: {errors}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise UpstreamError("Invalid GraphQL response: missing data")
        return data


def _next_page_token(response: httpx.Response) -> Optional[str]:
    """Extract page_info from the Link header's rel="next" entry."""
    next_link = response.links.get("next")
    if not next_link or not next_link.get("url"):
        return None
    return httpx.URL(next_link["url"]).params.get("page_info")
