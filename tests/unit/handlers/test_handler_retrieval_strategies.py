# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for the Secrets Safe and managed account retrieval strategies.

Each test signs a session token into the fake vault directly, so only the
retrieval requests show up in ``vault.calls``.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from uuid import uuid4

import httpx
import pytest
from pydantic import SecretStr

from passwordsafe_provider.errors import (
    InfraUnavailableError,
    SecretNotFoundError,
    SecretTooLargeError,
)
from passwordsafe_provider.handlers import ManagedAccountStrategy, SecretsSafeStrategy
from passwordsafe_provider.mixins import MAX_ERROR_BODY_BYTES
from passwordsafe_provider.models import ModelAuthSession, ModelSecretKeyPath
from tests.helpers import API_URL, FakePasswordSafeVault

MAX_SIZE = 5_000_000


@pytest.fixture
def session(vault: FakePasswordSafeVault) -> ModelAuthSession:
    vault.issued_tokens.append("session-token")
    return ModelAuthSession(
        access_token=SecretStr("session-token"),
        expires_at=datetime.now(UTC),
    )


def _client(vault: FakePasswordSafeVault | StreamingFileVault) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(vault))


async def _fetch(
    strategy: SecretsSafeStrategy | ManagedAccountStrategy,
    vault: FakePasswordSafeVault | StreamingFileVault,
    session: ModelAuthSession,
    key: str,
    max_size: int = MAX_SIZE,
) -> bytes:
    async with _client(vault) as client:
        return await strategy.fetch(
            client,
            session,
            ModelSecretKeyPath.parse(key),
            separator="/",
            max_secret_size_bytes=max_size,
            correlation_id=uuid4(),
        )


class StreamingFileVault:
    """Serves one file secret whose download body is streamed in chunks.

    Attributes:
        bytes_sent: Body bytes handed to the client so far
    """

    def __init__(
        self,
        chunk_count: int,
        chunk_size: int,
        *,
        status_code: int = 200,
        declared_length: int | None = None,
    ) -> None:
        self.chunk_count = chunk_count
        self.chunk_size = chunk_size
        self.status_code = status_code
        self.declared_length = declared_length
        self.bytes_sent = 0

    async def _body(self) -> AsyncIterator[bytes]:
        for _ in range(self.chunk_count):
            self.bytes_sent += self.chunk_size
            yield b"x" * self.chunk_size

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if not request.url.path.endswith("/file/download"):
            return httpx.Response(
                200,
                json=[{"Id": "7", "Title": "bundle", "SecretType": "File"}],
            )
        headers = {}
        if self.declared_length is not None:
            headers["Content-Length"] = str(self.declared_length)
        return httpx.Response(self.status_code, headers=headers, content=self._body())


class TestSecretsSafeStrategy:
    async def test_text_secret(
        self, vault: FakePasswordSafeVault, session: ModelAuthSession
    ) -> None:
        value = await _fetch(SecretsSafeStrategy(API_URL), vault, session, "prod/db-password")

        assert value == b"s3cret-value"
        assert vault.calls == ["GET /secrets-safe/secrets"]
        params = vault.requests[0].url.params
        assert params["path"] == "prod"
        assert params["title"] == "db-password"
        assert params["separator"] == "/"

    async def test_file_secret_downloaded(
        self, vault: FakePasswordSafeVault, session: ModelAuthSession
    ) -> None:
        value = await _fetch(SecretsSafeStrategy(API_URL), vault, session, "prod/tls-bundle")

        assert value == b"-----BEGIN CERTIFICATE-----\n"
        assert vault.calls[-1].endswith("/file/download")

    async def test_file_secret_at_limit_allowed(
        self, vault: FakePasswordSafeVault, session: ModelAuthSession
    ) -> None:
        size = len(b"-----BEGIN CERTIFICATE-----\n")

        value = await _fetch(
            SecretsSafeStrategy(API_URL), vault, session, "prod/tls-bundle", max_size=size
        )

        assert len(value) == size

    async def test_file_secret_over_limit(
        self, vault: FakePasswordSafeVault, session: ModelAuthSession
    ) -> None:
        with pytest.raises(SecretTooLargeError) as exc_info:
            await _fetch(
                SecretsSafeStrategy(API_URL), vault, session, "prod/tls-bundle", max_size=10
            )

        assert exc_info.value.context["max_size_bytes"] == 10
        assert exc_info.value.context["size_bytes"] > 10

    async def test_no_match(
        self, vault: FakePasswordSafeVault, session: ModelAuthSession
    ) -> None:
        with pytest.raises(SecretNotFoundError) as exc_info:
            await _fetch(SecretsSafeStrategy(API_URL), vault, session, "prod/missing")

        assert exc_info.value.context["secret_key"] == "prod/missing"

    async def test_multiple_matches_use_first(self, session: ModelAuthSession) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=[
                    {"Id": "1", "Title": "t", "Password": "first"},
                    {"Id": "2", "Title": "t", "Password": "second"},
                ],
            )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            value = await SecretsSafeStrategy(API_URL).fetch(
                client,
                session,
                ModelSecretKeyPath.parse("f/t"),
                separator="/",
                max_secret_size_bytes=MAX_SIZE,
                correlation_id=uuid4(),
            )

        assert value == b"first"

    async def test_custom_separator_sent_to_vault(
        self, vault: FakePasswordSafeVault, session: ModelAuthSession
    ) -> None:
        async with _client(vault) as client:
            value = await SecretsSafeStrategy(API_URL).fetch(
                client,
                session,
                ModelSecretKeyPath.parse("prod/db-password"),
                separator="|",
                max_secret_size_bytes=MAX_SIZE,
                correlation_id=uuid4(),
            )

        params = vault.requests[0].url.params
        assert value == b"s3cret-value"
        assert (params["path"], params["title"]) == ("prod", "db-password")
        assert params["separator"] == "|"


class TestStreamedFileDownload:
    """File downloads are read in chunks and abandoned once over the limit."""

    async def test_undeclared_length_stops_after_limit(
        self, session: ModelAuthSession
    ) -> None:
        file_vault = StreamingFileVault(chunk_count=50, chunk_size=1000)

        with pytest.raises(SecretTooLargeError) as exc_info:
            await _fetch(
                SecretsSafeStrategy(API_URL), file_vault, session, "f/bundle", 5000
            )

        assert file_vault.bytes_sent <= 6000
        assert 5000 < exc_info.value.context["size_bytes"] <= 6000
        assert exc_info.value.context["max_size_bytes"] == 5000

    async def test_declared_length_rejected_before_reading(
        self, session: ModelAuthSession
    ) -> None:
        file_vault = StreamingFileVault(
            chunk_count=50, chunk_size=1000, declared_length=50_000
        )

        with pytest.raises(SecretTooLargeError) as exc_info:
            await _fetch(
                SecretsSafeStrategy(API_URL), file_vault, session, "f/bundle", 5000
            )

        assert file_vault.bytes_sent == 0
        assert exc_info.value.context["size_bytes"] == 50_000

    async def test_chunks_joined_under_limit(self, session: ModelAuthSession) -> None:
        file_vault = StreamingFileVault(chunk_count=5, chunk_size=1000)

        value = await _fetch(
            SecretsSafeStrategy(API_URL), file_vault, session, "f/bundle", 5000
        )

        assert value == b"x" * 5000
        assert file_vault.bytes_sent == 5000

    async def test_error_body_read_is_bounded(self, session: ModelAuthSession) -> None:
        file_vault = StreamingFileVault(
            chunk_count=100, chunk_size=1000, status_code=503
        )

        with pytest.raises(InfraUnavailableError) as exc_info:
            await _fetch(SecretsSafeStrategy(API_URL), file_vault, session, "f/bundle")

        assert file_vault.bytes_sent <= MAX_ERROR_BODY_BYTES + 1000
        assert exc_info.value.context["status_code"] == 503
        assert len(exc_info.value.context["response_body"]) <= 203


class TestManagedAccountStrategy:
    async def test_request_cycle(
        self, vault: FakePasswordSafeVault, session: ModelAuthSession
    ) -> None:
        value = await _fetch(ManagedAccountStrategy(API_URL), vault, session, "db01/svc_app")

        assert value == b"managed-pass"
        assert vault.calls == [
            "GET /ManagedAccounts",
            "POST /Requests",
            f"GET /Credentials/{vault.REQUEST_ID}",
            f"PUT /Requests/{vault.REQUEST_ID}/checkin",
        ]

    async def test_request_body(
        self, vault: FakePasswordSafeVault, session: ModelAuthSession
    ) -> None:
        await _fetch(ManagedAccountStrategy(API_URL), vault, session, "db01/svc_app")

        body = json.loads(vault.requests_to("POST", "/Requests")[0].content)
        assert body["SystemID"] == 10
        assert body["AccountID"] == 100
        assert body["DurationMinutes"] == 5
        assert body["ConflictOption"] == "reuse"
        assert body["Reason"]

    async def test_check_in_after_credential_failure(
        self, session: ModelAuthSession
    ) -> None:
        vault = FakePasswordSafeVault(credential_status=500)
        vault.issued_tokens.append("session-token")
        vault.add_managed_account("db01", "svc_app", "managed-pass")

        with pytest.raises(InfraUnavailableError):
            await _fetch(ManagedAccountStrategy(API_URL), vault, session, "db01/svc_app")

        assert len(vault.requests_to("PUT", f"/Requests/{vault.REQUEST_ID}/checkin")) == 1

    async def test_check_in_failure_does_not_fail_fetch(
        self, session: ModelAuthSession
    ) -> None:
        vault = FakePasswordSafeVault(checkin_status=500)
        vault.issued_tokens.append("session-token")
        vault.add_managed_account("db01", "svc_app", "managed-pass")

        value = await _fetch(ManagedAccountStrategy(API_URL), vault, session, "db01/svc_app")

        assert value == b"managed-pass"

    async def test_unknown_account(
        self, vault: FakePasswordSafeVault, session: ModelAuthSession
    ) -> None:
        with pytest.raises(SecretNotFoundError):
            await _fetch(ManagedAccountStrategy(API_URL), vault, session, "db01/nobody")

        assert vault.requests_to("POST", "/Requests") == []

    async def test_list_lookup_response(self, session: ModelAuthSession) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path
            if path.endswith("/ManagedAccounts"):
                return httpx.Response(200, json=[{"SystemId": 1, "AccountId": 2}])
            if path.endswith("/Requests"):
                return httpx.Response(201, json="77")
            if path.endswith("/Credentials/77"):
                return httpx.Response(200, json="pw")
            return httpx.Response(204)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            value = await ManagedAccountStrategy(API_URL).fetch(
                client,
                session,
                ModelSecretKeyPath.parse("s/a"),
                separator="/",
                max_secret_size_bytes=MAX_SIZE,
                correlation_id=uuid4(),
            )

        assert value == b"pw"

    async def test_missing_request_id(self, session: ModelAuthSession) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/ManagedAccounts"):
                return httpx.Response(200, json={"SystemId": 1, "AccountId": 2})
            return httpx.Response(200, json={"unexpected": True})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(InfraUnavailableError, match="request id"):
                await ManagedAccountStrategy(API_URL).fetch(
                    client,
                    session,
                    ModelSecretKeyPath.parse("s/a"),
                    separator="/",
                    max_secret_size_bytes=MAX_SIZE,
                    correlation_id=uuid4(),
                )
