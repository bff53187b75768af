# Rate limiting configuration for PixelForge Nexus
# Credential endpoints are limited per client IP to slow down password guessing

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

RATE_LIMITS = {
    "auth_operations": "20/minute",
    "password_change": "5/minute",
}

__all__ = ["limiter", "RATE_LIMITS"]
