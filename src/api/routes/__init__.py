# API Routes
"""
API route modules.
"""

from src.api.routes import health, keys

__all__ = ["health", "keys"]
