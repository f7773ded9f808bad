"""
Security configuration - Immutable secrets and lifetimes for the domain.

Built once at process start (see ``src.api.dependencies``) and passed by
reference into every component that needs it. The domain never reads
environment variables itself.
"""

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class SecurityConfig:
    """Secrets, key material and token lifetimes."""

    activation_secret: str
    crypto_secret: str
    iv_source: str
    access_token_secret: str
    activation_token_ttl: timedelta = timedelta(minutes=3)
    access_token_ttl: timedelta = timedelta(minutes=5)
    otp_length: int = 6
    remember_me_ttl: timedelta = timedelta(days=7)
    secure_cookies: bool = False
    random_iv: bool = False
    bcrypt_cost: int = 12
