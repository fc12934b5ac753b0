"""
Services package - business logic layer.
"""
from users_svc.services.auth_service import AuthenticationService
from users_svc.services.seeder import seed_admin
from users_svc.services.user_service import UserService

__all__ = ["AuthenticationService", "UserService", "seed_admin"]
