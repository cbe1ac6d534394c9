from order_lookup.cache.result_cache import ResultCache

__all__ = ["ResultCache"]
