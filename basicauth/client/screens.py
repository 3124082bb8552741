"""
Screen controllers: login, registration, password reset and user listing.

Each screen collects form values, issues one request through ApiService,
and reports the outcome through injected callbacks: `notify(message)` for
transient notifications and `navigate(destination)` for navigation events.
Rendering is left to whatever UI drives the screen.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import tzinfo
from enum import Enum
from typing import Awaitable, Callable, Optional

from basicauth.client.api_service import ApiService
from basicauth.client.lifecycle import ScreenScope
from basicauth.client.results import ApiResult, Failure, FailureKind
from basicauth.client.session_store import SessionStore
from basicauth.schemas.auth import ForgotPasswordRequest, LoginRequest, RegisterRequest
from basicauth.schemas.user import UserRecord
from basicauth.utils.time_format import TimestampFormatError

logger = logging.getLogger(__name__)

FILL_ALL_FIELDS = "Please fill all fields"


class Destination(str, Enum):
    USERS = "users"
    REGISTER = "register"
    FORGOT_PASSWORD = "forgot_password"
    FINISH = "finish"  # close the current screen


Notifier = Callable[[str], None]
Navigator = Callable[[Destination], None]


class Screen:
    """
    Base for all screens.

    At most one request is in flight per screen; submissions made while one
    is pending are dropped. Once the scope is closed no callback fires.
    """

    def __init__(
        self,
        api: ApiService,
        notify: Notifier,
        navigate: Optional[Navigator] = None,
        scope: Optional[ScreenScope] = None,
    ):
        self.api = api
        self._notify = notify
        self._navigate = navigate
        self.scope = scope or ScreenScope(type(self).__name__)
        self._in_flight = False

    @property
    def busy(self) -> bool:
        return self._in_flight

    def close(self) -> None:
        """Discard the screen: cancel pending work and silence callbacks."""
        self.scope.close()

    def notify(self, message: str) -> None:
        if self.scope.active:
            self._notify(message)

    def navigate(self, destination: Destination) -> None:
        if self.scope.active and self._navigate is not None:
            self._navigate(destination)

    def _has_all(self, *values: str) -> bool:
        if all(values):
            return True
        self.notify(FILL_ALL_FIELDS)
        return False

    def _start(self, action: Callable[[], Awaitable[ApiResult]]) -> Optional[asyncio.Task]:
        if self._in_flight:
            logger.debug("%s: request already in flight, ignoring submit", type(self).__name__)
            return None
        if not self.scope.active:
            return None

        self._in_flight = True
        try:
            return self.scope.launch(self._run(action))
        except BaseException:
            self._in_flight = False
            raise

    async def _run(self, action: Callable[[], Awaitable[ApiResult]]) -> ApiResult:
        try:
            return await action()
        finally:
            self._in_flight = False

    def _report(self, failure: Failure, status_message: str) -> None:
        if failure.kind is FailureKind.HTTP_STATUS:
            self.notify(status_message)
        else:
            self.notify(f"Error: {failure.message}")


class LoginScreen(Screen):
    """Email/password login. A successful login stores the token and opens the user list."""

    def __init__(
        self,
        api: ApiService,
        store: SessionStore,
        notify: Notifier,
        navigate: Optional[Navigator] = None,
        scope: Optional[ScreenScope] = None,
    ):
        super().__init__(api, notify, navigate, scope)
        self.store = store

    def submit(self, email: str, password: str) -> Optional[asyncio.Task]:
        if self._in_flight or not self._has_all(email, password):
            return None
        return self._start(lambda: self._login(LoginRequest(email=email, password=password)))

    async def _login(self, request: LoginRequest) -> ApiResult:
        result = await self.api.login(request)
        if not self.scope.active:
            return result

        if isinstance(result, Failure):
            self._report(result, "Login failed")
            return result

        await asyncio.to_thread(self.store.set, result.value)
        logger.debug("Login succeeded, session token stored")
        self.navigate(Destination.USERS)
        self.navigate(Destination.FINISH)
        return result

    def open_register(self) -> None:
        self.navigate(Destination.REGISTER)

    def open_forgot_password(self) -> None:
        self.navigate(Destination.FORGOT_PASSWORD)


class RegisterScreen(Screen):
    def submit(
        self,
        username: str,
        email: str,
        password: str,
        security_question: str,
        security_answer: str,
    ) -> Optional[asyncio.Task]:
        if self._in_flight or not self._has_all(
            username, email, password, security_question, security_answer
        ):
            return None
        request = RegisterRequest(
            username=username,
            email=email,
            password=password,
            security_question=security_question,
            security_answer=security_answer,
        )
        return self._start(lambda: self._register(request))

    async def _register(self, request: RegisterRequest) -> ApiResult:
        result = await self.api.register(request)
        if not self.scope.active:
            return result

        if isinstance(result, Failure):
            self._report(result, "Registration failed")
            return result

        self.notify("Registration successful")
        self.navigate(Destination.FINISH)
        return result


class ForgotPasswordScreen(Screen):
    def submit(self, email: str, security_answer: str, new_password: str) -> Optional[asyncio.Task]:
        if self._in_flight or not self._has_all(email, security_answer, new_password):
            return None
        request = ForgotPasswordRequest(
            email=email,
            security_answer=security_answer,
            new_password=new_password,
        )
        return self._start(lambda: self._reset(request))

    async def _reset(self, request: ForgotPasswordRequest) -> ApiResult:
        result = await self.api.forgot_password(request)
        if not self.scope.active:
            return result

        if isinstance(result, Failure):
            self._report(result, "Failed to reset password")
            return result

        self.notify("Password reset successful")
        self.navigate(Destination.FINISH)
        return result


@dataclass(frozen=True)
class UserRow:
    """One line of the user list as displayed."""
    id: int
    username: str
    email: str
    created_at: str


def display_rows(users: list[UserRecord], tz: Optional[tzinfo] = None) -> list[UserRow]:
    """Format users for display. Unparseable timestamps are shown raw."""
    rows = []
    for user in users:
        try:
            created = user.formatted_created_at(tz)
        except TimestampFormatError as e:
            logger.warning(f"User {user.id}: {e}")
            created = user.created_at
        rows.append(UserRow(id=user.id, username=user.username, email=user.email, created_at=created))
    return rows


class UsersScreen(Screen):
    """Authenticated user list. The token comes from the session store."""

    def __init__(
        self,
        api: ApiService,
        store: SessionStore,
        notify: Notifier,
        render: Optional[Callable[[list[UserRow]], None]] = None,
        navigate: Optional[Navigator] = None,
        scope: Optional[ScreenScope] = None,
        tz: Optional[tzinfo] = None,
    ):
        super().__init__(api, notify, navigate, scope)
        self.store = store
        self._render = render
        self.tz = tz
        self.users: list[UserRecord] = []
        self.rows: list[UserRow] = []

    def load(self) -> Optional[asyncio.Task]:
        token = self.store.get() or ""
        return self._start(lambda: self._load(token))

    async def _load(self, token: str) -> ApiResult:
        result = await self.api.get_users(token)
        if not self.scope.active:
            return result

        if isinstance(result, Failure):
            self._report(result, "Failed to load users")
            return result

        self.users = result.value
        self.rows = display_rows(self.users, self.tz)
        if self._render is not None:
            self._render(self.rows)
        return result
