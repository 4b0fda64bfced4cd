from slowapi import Limiter
from slowapi.util import get_remote_address

from estatehub.core.config import settings

# Shared limiter for the public, unauthenticated form endpoints.
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
)
