"""
Sit-and-Go Server - FastAPI HTTP layer
"""

from sitngo.server.app import app, create_app

__all__ = ["app", "create_app"]
