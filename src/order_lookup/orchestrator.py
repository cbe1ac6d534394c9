"""
Lookup Orchestrator

Entry point for order lookups:

1. Validate the contact type (InvalidInput, no upstream call)
2. Return a cached result on hit
3. On miss, run the matching strategy through the coordinator
4. Cache results of up to max_cached_results orders
5. Wrap any failure in LookupFailed; the cause is logged only
"""

import asyncio
import logging
from typing import Dict, List, Optional

from order_lookup.cache.result_cache import (
    DEFAULT_MAX_VALUE_LENGTH,
    ResultCache,
)
from order_lookup.clients.shopify_client import ShopifyClient
from order_lookup.config import ServiceConfig
from order_lookup.coordinator import (
    DEFAULT_MAX_CONCURRENT,
    LookupCoordinator,
    Strategy,
)
from order_lookup.errors import InvalidInput, LookupFailed, OrderNotFound
from order_lookup.models import (
    CONTACT_EMAIL,
    CONTACT_PHONE,
    CONTACT_TYPES,
    ORDER_DETAILS,
    LookupTask,
    OrderSummary,
    make_cache_key,
)
from order_lookup.strategies import (
    DEFAULT_MAX_PAGES,
    find_order_by_number,
    lookback_start,
    search_by_email,
    search_by_phone,
)

logger = logging.getLogger(__name__)

ORDERS_ERROR_MESSAGE = "An error occurred while fetching the order information"
DETAILS_ERROR_MESSAGE = "An error occurred while fetching the order details"
DETAILS_KEY_PREFIX = "order-details"


def build_strategies(
    client: ShopifyClient,
    max_pages: int = DEFAULT_MAX_PAGES,
    lookback_days: int = 0,
) -> Dict[str, Strategy]:
    """Bind the lookup strategies to a client and lookup settings."""

    def by_email(email: str) -> List[OrderSummary]:
        return search_by_email(
            client,
            email,
            max_pages=max_pages,
            created_at_min=lookback_start(lookback_days),
        )

    def by_phone(phone: str) -> List[OrderSummary]:
        return search_by_phone(client, phone)

    def by_order_number(order_number: str) -> OrderSummary:
        return find_order_by_number(client, order_number)

    return {
        CONTACT_EMAIL: by_email,
        CONTACT_PHONE: by_phone,
        ORDER_DETAILS: by_order_number,
    }


class OrderLookupOrchestrator:
    """Cache-fronted, concurrency-bounded order lookups."""

    def __init__(
        self,
        client: ShopifyClient,
        cache: Optional[ResultCache] = None,
        details_cache: Optional[ResultCache] = None,
        coordinator: Optional[LookupCoordinator] = None,
        max_pages: int = DEFAULT_MAX_PAGES,
        lookback_days: int = 0,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
        max_cached_results: int = DEFAULT_MAX_VALUE_LENGTH,
    ):
        """
        Args:
            client: Shopify client shared by all strategies
            cache: Result cache for contact lookups (fresh one if None)
            details_cache: Cache for single-order lookups (fresh one if None)
            coordinator: Worker pool (built from the strategies if None)
            max_pages: Upper bound on REST pages per email lookup
            lookback_days: Only return orders from the last N days (0 = all)
            max_concurrent: Worker count when building the coordinator
            max_cached_results: Larger result lists are returned but not cached
        """
        self.client = client
        self.cache = cache if cache is not None else ResultCache()
        self.details_cache = details_cache if details_cache is not None else ResultCache()
        self.coordinator = coordinator or LookupCoordinator(
            build_strategies(client, max_pages=max_pages, lookback_days=lookback_days),
            max_concurrent=max_concurrent,
        )
        self.max_cached_results = max_cached_results

    @classmethod
    def from_config(
        cls, config: ServiceConfig, client: Optional[ShopifyClient] = None
    ) -> "OrderLookupOrchestrator":
        """Build an orchestrator with fresh caches from configuration."""
        client = client or ShopifyClient.from_config(config)

        def make_cache() -> ResultCache:
            return ResultCache(
                ttl_seconds=config.CACHE_TTL_SECONDS,
                max_keys=config.CACHE_MAX_KEYS,
                max_value_length=config.CACHE_MAX_RESULTS,
            )

        return cls(
            client=client,
            cache=make_cache(),
            details_cache=make_cache(),
            max_pages=config.MAX_PAGES,
            lookback_days=config.LOOKBACK_DAYS,
            max_concurrent=config.WORKERS,
            max_cached_results=config.CACHE_MAX_RESULTS,
        )

    # ------------------------------------------------------------------
    # Contact lookups
    # ------------------------------------------------------------------

    def _start(self, contact_type: str, contact_info: str):
        """Return (cached_result, None) on hit or (None, (task, future)) on miss."""
        if contact_type not in CONTACT_TYPES:
            raise InvalidInput(
                f"contact_type must be one of {', '.join(CONTACT_TYPES)}"
            )

        task = LookupTask(type=contact_type, contact=contact_info)
        cached = self.cache.get(task.cache_key)
        if cached is not None:
            logger.info("Returning cached result", extra={"contact_type": contact_type})
            return cached, None

        logger.info("Cache miss, dispatching lookup", extra={"contact_type": contact_type})
        try:
            future = self.coordinator.submit(task)
        except RuntimeError as e:
            # Worker pool already shut down
            raise self._failed(task, e) from e
        return None, (task, future)

    def _failed(self, task: LookupTask, error: Exception) -> LookupFailed:
        logger.error(
            "Order lookup failed",
            extra={
                "contact_type": task.type,
                "error_type": type(error).__name__,
                "error_message": str(error),
            },
        )
        return LookupFailed(ORDERS_ERROR_MESSAGE)

    def _store(self, task: LookupTask, result: List[OrderSummary]) -> List[OrderSummary]:
        if len(result) <= self.max_cached_results:
            self.cache.set(task.cache_key, result)
        logger.info(
            "Order lookup complete",
            extra={"contact_type": task.type, "orders_count": len(result)}
        )
        return result

    def lookup(self, contact_type: str, contact_info: str) -> List[OrderSummary]:
        """
        Look up orders for a contact, blocking until the result is ready.

        Raises:
            InvalidInput: If contact_type is not "email" or "phone"
            LookupFailed: If the upstream lookup failed
        """
        cached, pending = self._start(contact_type, contact_info)
        if pending is None:
            return cached
        task, future = pending
        try:
            result = future.result()
        except Exception as e:
            raise self._failed(task, e) from e
        return self._store(task, result)

    async def lookup_async(self, contact_type: str, contact_info: str) -> List[OrderSummary]:
        """Same as lookup(), awaiting the worker without blocking the event loop."""
        cached, pending = self._start(contact_type, contact_info)
        if pending is None:
            return cached
        task, future = pending
        try:
            # Shielded: a cancelled caller leaves its task to run to completion
            result = await asyncio.shield(asyncio.wrap_future(future))
        except Exception as e:
            raise self._failed(task, e) from e
        return self._store(task, result)

    # ------------------------------------------------------------------
    # Single-order lookups
    # ------------------------------------------------------------------

    def get_order_details(self, order_number: str) -> OrderSummary:
        """
        Look up a single order by order number.

        Raises:
            OrderNotFound: If no order matches
            LookupFailed: If the upstream lookup failed
        """
        key = make_cache_key(DETAILS_KEY_PREFIX, order_number)
        cached = self.details_cache.get(key)
        if cached is not None:
            logger.info("Returning cached order details")
            return cached

        task = LookupTask(type=ORDER_DETAILS, contact=order_number)
        try:
            order = self.coordinator.submit(task).result()
        except OrderNotFound:
            raise
        except Exception as e:
            logger.error(
                "Order details lookup failed",
                extra={"error_type": type(e).__name__, "error_message": str(e)},
            )
            raise LookupFailed(DETAILS_ERROR_MESSAGE) from e

        self.details_cache.set(key, order)
        return order

    def close(self) -> None:
        """Stop the worker pool and close the upstream client."""
        self.coordinator.shutdown(wait=True)
        self.client.close()
