# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for PasswordSafeAuthenticator.

Retry behaviour is driven by FakeClock and FixedRandom(0.5), which makes
every delay equal to the un-jittered interval: 1, 2, 4, ... capped at 60s.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from urllib.parse import parse_qs

import httpx
import pytest

from passwordsafe_provider.errors import (
    AuthenticationExhaustedError,
    InfraAuthenticationError,
    InfraUnavailableError,
)
from passwordsafe_provider.handlers import PasswordSafeAuthenticator
from passwordsafe_provider.models import ModelBackoffConfig
from tests.helpers import (
    API_URL,
    FakeClock,
    FakePasswordSafeVault,
    FixedRandom,
    make_credentials,
)

ISSUED_AT = datetime(2025, 1, 1, tzinfo=UTC)


def _authenticator(
    fake_clock: FakeClock,
    backoff_config: ModelBackoffConfig | None = None,
    **credential_overrides: object,
) -> PasswordSafeAuthenticator:
    return PasswordSafeAuthenticator(
        make_credentials(**credential_overrides),
        backoff_config,
        sleep=fake_clock.sleep,
        clock=fake_clock,
        rng=FixedRandom(),
        now=lambda: ISSUED_AT,
    )


def _client(vault: FakePasswordSafeVault) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(vault))


class TestHandshake:
    async def test_token_then_sign_in(self, fake_clock: FakeClock) -> None:
        vault = FakePasswordSafeVault()

        async with _client(vault) as client:
            session = await _authenticator(fake_clock).authenticate(client)

        assert vault.calls == ["POST /Auth/connect/token", "POST /Auth/SignAppIn"]
        assert session.access_token.get_secret_value() == "token-1"
        assert fake_clock.sleeps == []

    async def test_token_request_uses_client_credentials_grant(
        self, fake_clock: FakeClock
    ) -> None:
        vault = FakePasswordSafeVault()

        async with _client(vault) as client:
            await _authenticator(fake_clock).authenticate(client)

        form = parse_qs(vault.requests[0].content.decode())
        assert form == {
            "client_id": ["client-id"],
            "client_secret": ["client-secret"],
            "grant_type": ["client_credentials"],
        }
        sign_in = vault.requests[1]
        assert sign_in.headers["Authorization"] == "Bearer token-1"

    async def test_token_response_without_access_token(
        self, fake_clock: FakeClock
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"expires_in": 60})

        config = ModelBackoffConfig(max_elapsed_time_seconds=1.0)
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(AuthenticationExhaustedError) as exc_info:
                await _authenticator(fake_clock, config).authenticate(client)

        assert isinstance(exc_info.value.last_error, InfraAuthenticationError)

    @pytest.mark.parametrize(
        "expires_in",
        [{"seconds": 60}, [3600], "soon", 1e300, float("nan")],
        ids=["mapping", "list", "text", "overflow", "nan"],
    )
    async def test_unusable_expires_in_is_an_authentication_error(
        self, fake_clock: FakeClock, expires_in: object
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/Auth/connect/token"):
                body = {"access_token": "token-1", "expires_in": expires_in}
                return httpx.Response(200, content=json.dumps(body))
            return httpx.Response(200, json={})

        config = ModelBackoffConfig(max_elapsed_time_seconds=1.0)
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(AuthenticationExhaustedError) as exc_info:
                await _authenticator(fake_clock, config).authenticate(client)

        error = exc_info.value.last_error
        assert isinstance(error, InfraAuthenticationError)
        assert isinstance(error.__cause__, ValueError)

    async def test_trailing_slash_in_api_url(self, fake_clock: FakeClock) -> None:
        vault = FakePasswordSafeVault()

        async with _client(vault) as client:
            await _authenticator(fake_clock, api_url=f"{API_URL}/").authenticate(
                client
            )

        assert vault.requests[0].url == f"{API_URL}/Auth/connect/token"
        assert vault.calls == ["POST /Auth/connect/token", "POST /Auth/SignAppIn"]


class TestRetry:
    async def test_succeeds_after_transient_failures(
        self, fake_clock: FakeClock
    ) -> None:
        vault = FakePasswordSafeVault(token_failures=3)

        async with _client(vault) as client:
            session = await _authenticator(fake_clock).authenticate(client)

        assert vault.token_calls == 4
        assert fake_clock.sleeps == [1.0, 2.0, 4.0]
        assert session.access_token.get_secret_value() == "token-4"

    async def test_retried_session_matches_immediate_success(
        self, fake_clock: FakeClock
    ) -> None:
        immediate_vault = FakePasswordSafeVault()
        retried_vault = FakePasswordSafeVault(token_failures=3)

        async with _client(immediate_vault) as client:
            immediate = await _authenticator(FakeClock()).authenticate(client)
        async with _client(retried_vault) as client:
            retried = await _authenticator(fake_clock).authenticate(client)

        assert retried_vault.token_calls == 4
        assert retried.expires_at == immediate.expires_at
        assert retried.expires_at == ISSUED_AT + timedelta(hours=1)
        assert retried.token_type == immediate.token_type == "Bearer"
        assert retried.scope == immediate.scope == "publicapi"
        assert retried_vault.calls[-1] == immediate_vault.calls[-1]
        assert retried_vault.requests[-1].headers["Authorization"] == "Bearer token-4"

    async def test_interval_is_capped(self, fake_clock: FakeClock) -> None:
        vault = FakePasswordSafeVault(token_failures=9)

        async with _client(vault) as client:
            await _authenticator(fake_clock).authenticate(client)

        assert fake_clock.sleeps == [1.0, 2.0, 4.0, 8.0, 16.0, 32.0, 60.0, 60.0, 60.0]

    async def test_persistent_failure_exhausts_budget(
        self, fake_clock: FakeClock
    ) -> None:
        vault = FakePasswordSafeVault(token_failures=None)

        async with _client(vault) as client:
            with pytest.raises(AuthenticationExhaustedError) as exc_info:
                await _authenticator(fake_clock).authenticate(client)

        error = exc_info.value
        assert 810.0 <= fake_clock.elapsed <= 900.0
        assert isinstance(error.last_error, InfraUnavailableError)
        assert error.__cause__ is error.last_error
        assert error.context["attempts"] == vault.token_calls
        assert error.context["last_error_type"] == "InfraUnavailableError"
        # Sign-in is never attempted without a token
        assert vault.requests_to("POST", "/Auth/SignAppIn") == []

    async def test_client_rejection_retried_by_default(
        self, fake_clock: FakeClock
    ) -> None:
        vault = FakePasswordSafeVault(token_failures=2, token_failure_status=401)

        async with _client(vault) as client:
            await _authenticator(fake_clock).authenticate(client)

        assert vault.token_calls == 3


class TestFailFast:
    async def test_401_raised_without_retry(self, fake_clock: FakeClock) -> None:
        vault = FakePasswordSafeVault(token_failures=None, token_failure_status=401)
        config = ModelBackoffConfig(retry_on_client_error=False)

        async with _client(vault) as client:
            with pytest.raises(InfraAuthenticationError) as exc_info:
                await _authenticator(fake_clock, config).authenticate(client)

        assert not isinstance(exc_info.value, AuthenticationExhaustedError)
        assert vault.token_calls == 1
        assert fake_clock.sleeps == []

    async def test_400_wrapped_as_authentication_error(
        self, fake_clock: FakeClock
    ) -> None:
        vault = FakePasswordSafeVault(token_failures=None, token_failure_status=400)
        config = ModelBackoffConfig(retry_on_client_error=False)

        async with _client(vault) as client:
            with pytest.raises(InfraAuthenticationError) as exc_info:
                await _authenticator(fake_clock, config).authenticate(client)

        assert exc_info.value.context["status_code"] == 400
        assert vault.token_calls == 1

    async def test_5xx_still_retried(self, fake_clock: FakeClock) -> None:
        vault = FakePasswordSafeVault(token_failures=1, token_failure_status=503)
        config = ModelBackoffConfig(retry_on_client_error=False)

        async with _client(vault) as client:
            await _authenticator(fake_clock, config).authenticate(client)

        assert vault.token_calls == 2


class TestDeadline:
    async def test_stops_before_deadline(self, fake_clock: FakeClock) -> None:
        vault = FakePasswordSafeVault(token_failures=None)
        deadline = fake_clock() + 5.0

        async with _client(vault) as client:
            with pytest.raises(AuthenticationExhaustedError, match="deadline"):
                await _authenticator(fake_clock).authenticate(
                    client, deadline=deadline
                )

        assert fake_clock.sleeps == [1.0, 2.0]
        assert fake_clock() <= deadline


class TestSignOut:
    async def test_sign_out_acknowledged(self, fake_clock: FakeClock) -> None:
        vault = FakePasswordSafeVault()
        authenticator = _authenticator(fake_clock)

        async with _client(vault) as client:
            session = await authenticator.authenticate(client)
            assert await authenticator.sign_out(client, session) is True

        signout = vault.requests_to("POST", "/Auth/Signout")
        assert len(signout) == 1
        assert signout[0].headers["Authorization"] == "Bearer token-1"

    async def test_sign_out_failure_returns_false(self, fake_clock: FakeClock) -> None:
        vault = FakePasswordSafeVault(signout_status=500)
        authenticator = _authenticator(fake_clock)

        async with _client(vault) as client:
            session = await authenticator.authenticate(client)
            assert await authenticator.sign_out(client, session) is False
