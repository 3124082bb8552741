# API Routes
from basicauth.api.health import router as health_router
from basicauth.api.auth import router as auth_router
from basicauth.api.users import router as users_router

__all__ = ["health_router", "auth_router", "users_router"]
