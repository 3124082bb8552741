"""
HTTP client for the BasicAuth REST contract.

Four endpoints: POST /register, POST /login, POST /forgot-password and the
authenticated GET /users. Every call returns an ApiResult; transport errors,
non-2xx statuses and malformed bodies come back as Failure values.
"""

import logging
from typing import Any, Callable, Optional, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from basicauth.client.results import ApiResult, Failure, FailureKind, Success
from basicauth.core.config import get_settings
from basicauth.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
)
from basicauth.schemas.user import UserRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

_USER_LIST = TypeAdapter(list[UserRecord])


def bearer(token: Optional[str]) -> str:
    """Authorization header value. A missing token still yields "Bearer "."""
    return f"Bearer {token or ''}"


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    text = response.text.strip()
    return text or response.reason_phrase or f"HTTP {response.status_code}"


class ApiService:
    """
    Async client for the auth server.

    Owns one httpx.AsyncClient; use as an async context manager or call
    aclose() when done.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = base_url or settings.API_BASE_URL
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ─── Endpoints ────────────────────────────────────────────

    async def register(self, request: RegisterRequest) -> ApiResult[None]:
        return await self._send("POST", "/register", body=request)

    async def login(self, request: LoginRequest) -> ApiResult[str]:
        return await self._send(
            "POST", "/login", body=request,
            parse=lambda payload: LoginResponse.model_validate(payload).token,
        )

    async def forgot_password(self, request: ForgotPasswordRequest) -> ApiResult[None]:
        return await self._send("POST", "/forgot-password", body=request)

    async def get_users(self, token: Optional[str]) -> ApiResult[list[UserRecord]]:
        return await self._send(
            "GET", "/users",
            headers={"Authorization": bearer(token)},
            parse=_USER_LIST.validate_python,
        )

    # ─── Plumbing ─────────────────────────────────────────────

    async def _send(
        self,
        method: str,
        path: str,
        body: Optional[BaseModel] = None,
        headers: Optional[dict[str, str]] = None,
        parse: Optional[Callable[[Any], T]] = None,
    ) -> ApiResult[T]:
        payload = body.model_dump(by_alias=True) if body is not None else None
        try:
            response = await self._client.request(method, path, json=payload, headers=headers)
        except httpx.HTTPError as e:
            message = str(e) or e.__class__.__name__
            logger.info("[API] %s %s failed: %s", method, path, message)
            return Failure(FailureKind.TRANSPORT, message)

        if not response.is_success:
            detail = _error_detail(response)
            logger.info("[API] %s %s -> %d %s", method, path, response.status_code, detail)
            return Failure(FailureKind.HTTP_STATUS, detail, status_code=response.status_code)

        if parse is None:
            return Success(None)

        try:
            return Success(parse(response.json()))
        except (ValueError, ValidationError) as e:
            logger.info("[API] %s %s returned a malformed body: %s", method, path, e)
            return Failure(
                FailureKind.MALFORMED_RESPONSE,
                f"Unexpected response from {path}",
                status_code=response.status_code,
            )
