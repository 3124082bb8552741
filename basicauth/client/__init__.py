# Client side of the auth contract
from basicauth.client.api_service import ApiService, bearer
from basicauth.client.lifecycle import ScopeClosedError, ScreenScope
from basicauth.client.results import ApiResult, Failure, FailureKind, Success
from basicauth.client.screens import (
    Destination,
    ForgotPasswordScreen,
    LoginScreen,
    RegisterScreen,
    UserRow,
    UsersScreen,
    display_rows,
)
from basicauth.client.session_store import FileSessionStore, InMemorySessionStore, SessionStore

__all__ = [
    "ApiResult",
    "ApiService",
    "Destination",
    "Failure",
    "FailureKind",
    "FileSessionStore",
    "ForgotPasswordScreen",
    "InMemorySessionStore",
    "LoginScreen",
    "RegisterScreen",
    "ScopeClosedError",
    "ScreenScope",
    "SessionStore",
    "Success",
    "UserRow",
    "UsersScreen",
    "bearer",
    "display_rows",
]
