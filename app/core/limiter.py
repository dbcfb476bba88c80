"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Limit strings live here.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Session resolution runs on every guarded page load
SESSION_RESOLVE_LIMIT = "300/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"
ONBOARDING_LIMIT = "10/minute"

limit_session = limiter.limit(SESSION_RESOLVE_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
limit_onboarding = limiter.limit(ONBOARDING_LIMIT)
