"""Building blocks for Discord bots: REST client, rate limiting, caching and typed models."""

__version__ = "1.0.0"

__all__ = [
    "cache_manager",
    "http_client",
    "info",
    "memory_cache",
    "rate_limiter",
    "rest_endpoints",
    "types",
]