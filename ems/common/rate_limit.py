"""Rate limiting configuration using slowapi.

Provides a module-level Limiter instance wired into the FastAPI app in
main.py through ``SlowAPIMiddleware``.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from ems.config import settings

# Default limit applies to every endpoint; individual routes can override
# with @limiter.limit("N/period").
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    enabled=settings.RATE_LIMIT_ENABLED,
)
