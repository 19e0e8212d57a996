# attendance_book/backend/api/utilities/limiter.py

from slowapi import Limiter
from slowapi.util import get_remote_address

from ...config.config import settings

# There are no user accounts, so every client is limited by its IP address.
# RATE_LIMIT_ENABLED=false turns the decorators into no-ops (used by the tests).
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.RATE_LIMITER_STORAGE_URI,
    enabled=settings.RATE_LIMIT_ENABLED,
)

DEFAULT_LIMIT = settings.DEFAULT_RATE_LIMIT
