"""
API routes for the guestbook service.
"""

from app.api.routes import guestbook, health

__all__ = ["guestbook", "health"]
