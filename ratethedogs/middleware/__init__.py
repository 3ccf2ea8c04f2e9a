"""Request middleware and identity dependencies for RateTheDogs."""

from .admin import require_admin
from .anon import AnonContext, AnonymousIdMiddleware, get_anon_context, require_active_anon
from .request_logging import RequestLoggingMiddleware

__all__ = [
    "require_admin",
    "AnonContext",
    "AnonymousIdMiddleware",
    "get_anon_context",
    "require_active_anon",
    "RequestLoggingMiddleware",
]
