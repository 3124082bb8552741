"""Tests for ApiService against mocked HTTP transports."""

import json

import httpx
import pytest

from basicauth.client.api_service import ApiService, bearer
from basicauth.client.results import Failure, FailureKind, Success
from basicauth.schemas.auth import ForgotPasswordRequest, LoginRequest, RegisterRequest


def make_service(handler) -> ApiService:
    return ApiService(base_url="http://testserver/", transport=httpx.MockTransport(handler))


class TestBearer:

    def test_with_token(self):
        assert bearer("abc") == "Bearer abc"

    def test_missing_token_keeps_prefix(self):
        assert bearer(None) == "Bearer "
        assert bearer("") == "Bearer "


class TestRequests:

    @pytest.mark.asyncio
    async def test_register_sends_camel_case_body(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(201)

        async with make_service(handler) as api:
            result = await api.register(RegisterRequest(
                username="alice", email="a@x.io", password="pw",
                security_question="q", security_answer="a",
            ))

        assert result == Success(None)
        assert seen["method"] == "POST"
        assert seen["path"] == "/register"
        assert seen["body"] == {
            "username": "alice", "email": "a@x.io", "password": "pw",
            "securityQuestion": "q", "securityAnswer": "a",
        }

    @pytest.mark.asyncio
    async def test_login_returns_token(self):
        def handler(request):
            assert json.loads(request.content) == {"email": "a@x.io", "password": "pw"}
            return httpx.Response(200, json={"token": "jwt-123"})

        async with make_service(handler) as api:
            result = await api.login(LoginRequest(email="a@x.io", password="pw"))

        assert isinstance(result, Success)
        assert result.value == "jwt-123"

    @pytest.mark.asyncio
    async def test_forgot_password_body(self):
        def handler(request):
            assert request.url.path == "/forgot-password"
            assert json.loads(request.content) == {
                "email": "a@x.io", "securityAnswer": "Rex", "newPassword": "new",
            }
            return httpx.Response(200)

        async with make_service(handler) as api:
            result = await api.forgot_password(
                ForgotPasswordRequest(email="a@x.io", security_answer="Rex", new_password="new")
            )

        assert result.ok

    @pytest.mark.asyncio
    async def test_get_users_parses_records(self):
        def handler(request):
            assert request.headers["Authorization"] == "Bearer tok"
            return httpx.Response(200, json=[
                {"id": 1, "username": "a", "email": "a@x.io", "createdAt": "2024-03-05T14:30:00Z"},
                {"id": 2, "username": "b", "email": "b@x.io", "createdAt": "2024-03-06T09:00:00Z"},
            ])

        async with make_service(handler) as api:
            result = await api.get_users("tok")

        assert isinstance(result, Success)
        assert [u.username for u in result.value] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_get_users_with_empty_token_sends_bare_bearer(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(401, json={"detail": "Unauthorized"})

        async with make_service(handler) as api:
            result = await api.get_users(None)

        assert seen["auth"] == "Bearer "
        assert isinstance(result, Failure)
        assert result.kind is FailureKind.HTTP_STATUS
        assert result.status_code == 401


class TestFailures:

    @pytest.mark.asyncio
    async def test_non_2xx_uses_detail_message(self):
        async with make_service(lambda r: httpx.Response(409, json={"detail": "User already exists"})) as api:
            result = await api.register(RegisterRequest(
                username="u", email="e", password="p", security_question="q", security_answer="a",
            ))

        assert result == Failure(FailureKind.HTTP_STATUS, "User already exists", status_code=409)

    @pytest.mark.asyncio
    async def test_non_2xx_plain_text_body(self):
        async with make_service(lambda r: httpx.Response(500, text="boom")) as api:
            result = await api.login(LoginRequest(email="e", password="p"))

        assert result.kind is FailureKind.HTTP_STATUS
        assert result.message == "boom"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with make_service(handler) as api:
            result = await api.login(LoginRequest(email="e", password="p"))

        assert result.kind is FailureKind.TRANSPORT
        assert "connection refused" in result.message

    @pytest.mark.asyncio
    async def test_timeout_is_a_transport_failure(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_service(handler) as api:
            result = await api.get_users("t")

        assert result.kind is FailureKind.TRANSPORT

    @pytest.mark.asyncio
    async def test_login_without_token_is_malformed(self):
        async with make_service(lambda r: httpx.Response(200, json={"access": "x"})) as api:
            result = await api.login(LoginRequest(email="e", password="p"))

        assert result.kind is FailureKind.MALFORMED_RESPONSE

    @pytest.mark.asyncio
    async def test_users_body_not_json_is_malformed(self):
        async with make_service(lambda r: httpx.Response(200, text="<html>")) as api:
            result = await api.get_users("t")

        assert result.kind is FailureKind.MALFORMED_RESPONSE

    @pytest.mark.asyncio
    async def test_users_body_wrong_shape_is_malformed(self):
        async with make_service(lambda r: httpx.Response(200, json={"users": []})) as api:
            result = await api.get_users("t")

        assert result.kind is FailureKind.MALFORMED_RESPONSE

    @pytest.mark.asyncio
    async def test_users_body_not_utf8_is_malformed(self):
        body = b'[{"id":1,"username":"\xff"}]'
        async with make_service(lambda r: httpx.Response(200, content=body)) as api:
            result = await api.get_users("t")

        assert isinstance(result, Failure)
        assert result.kind is FailureKind.MALFORMED_RESPONSE

    @pytest.mark.asyncio
    async def test_login_body_not_utf8_is_malformed(self):
        async with make_service(lambda r: httpx.Response(200, content=b'{"token":"\xfe\xff"}')) as api:
            result = await api.login(LoginRequest(email="e", password="p"))

        assert result.kind is FailureKind.MALFORMED_RESPONSE


class TestFailureKinds:

    def test_taxonomy_covers_network_outcomes_only(self):
        assert {kind.name for kind in FailureKind} == {
            "TRANSPORT", "HTTP_STATUS", "MALFORMED_RESPONSE",
        }
