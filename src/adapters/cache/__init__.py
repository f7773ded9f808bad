"""Cache adapters - Session cache implementations."""

from .redis import RedisSessionCache

__all__ = ["RedisSessionCache"]
