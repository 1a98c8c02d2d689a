from moviemate.api.middleware.rate_limit import InMemoryRateLimitStore, RateLimitMiddleware
from moviemate.api.middleware.request_id import REQUEST_ID_HEADER, RequestIdMiddleware

__all__ = [
    "InMemoryRateLimitStore",
    "RateLimitMiddleware",
    "REQUEST_ID_HEADER",
    "RequestIdMiddleware",
]
