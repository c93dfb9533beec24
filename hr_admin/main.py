"""
Entry point ASGI.

Uso:
    uvicorn hr_admin.main:app --reload
"""

from .api.main import app

__all__ = ["app"]
