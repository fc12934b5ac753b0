"""
API routers.
"""
from users_svc.routers import auth, health, users

__all__ = ["auth", "health", "users"]
