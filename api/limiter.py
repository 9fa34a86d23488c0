"""
api/limiter.py -- The one slowapi Limiter for IdeaBoard.

api/main.py mounts it (app.state.limiter + SlowAPIMiddleware) and
api/routes/users.py decorates POST /users/login with it. Hits are counted per
client IP in the store named by RATE_LIMIT_STORAGE_URI; "memory://" counts
per process, so multi-worker deployments should point it at Redis.

RATE_LIMIT_ENABLED=false switches every limit off (the test suite flips
limiter.enabled directly).
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from core.config import get_settings

_settings = get_settings()

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=_settings.rate_limit_storage_uri,
    enabled=_settings.rate_limit_enabled,
)
