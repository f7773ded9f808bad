"""
API v1 package.

Contains versioned API routes for signup, verification and signin.
"""

from src.api.v1.routes import router

__all__ = ["router"]
