from slowapi import Limiter
from slowapi.util import get_remote_address

from homefinder.core.config import get_settings

settings = get_settings()

limiter = Limiter(key_func=get_remote_address)

DEFAULT_RATE_LIMIT = f"{settings.rate_limit_requests_per_minute}/minute"
