# API Schemas
from basicauth.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
)
from basicauth.schemas.user import UserRecord, UserResponse

__all__ = [
    "ForgotPasswordRequest",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "UserRecord",
    "UserResponse",
]
