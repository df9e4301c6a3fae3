# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for RetrievalDispatcher."""

from __future__ import annotations

from datetime import UTC, datetime

import httpx
import pytest
from pydantic import SecretStr

from passwordsafe_provider.enums import EnumRetrievalType
from passwordsafe_provider.errors import MalformedKeyError, UnsupportedRetrievalTypeError
from passwordsafe_provider.handlers import (
    ManagedAccountStrategy,
    RetrievalDispatcher,
    SecretsSafeStrategy,
)
from passwordsafe_provider.models import ModelAuthSession
from tests.helpers import API_URL, FakePasswordSafeVault


@pytest.fixture
def dispatcher() -> RetrievalDispatcher:
    return RetrievalDispatcher.for_api_url(API_URL)


@pytest.fixture
def session(vault: FakePasswordSafeVault) -> ModelAuthSession:
    vault.issued_tokens.append("session-token")
    return ModelAuthSession(
        access_token=SecretStr("session-token"),
        expires_at=datetime.now(UTC),
    )


class TestPlan:
    def test_closed_dispatch_table(self, dispatcher: RetrievalDispatcher) -> None:
        assert set(dispatcher.strategies) == {
            EnumRetrievalType.SECRET,
            EnumRetrievalType.MANAGED_ACCOUNT,
        }
        with pytest.raises(TypeError):
            dispatcher.strategies[EnumRetrievalType.SECRET] = None  # type: ignore[index]

    @pytest.mark.parametrize(
        ("retrieval_type", "strategy_cls"),
        [
            ("SECRET", SecretsSafeStrategy),
            ("MANAGED_ACCOUNT", ManagedAccountStrategy),
            (EnumRetrievalType.MANAGED_ACCOUNT, ManagedAccountStrategy),
        ],
    )
    def test_selects_strategy(
        self,
        dispatcher: RetrievalDispatcher,
        retrieval_type: str,
        strategy_cls: type,
    ) -> None:
        path, strategy = dispatcher.plan("a/b", retrieval_type)

        assert (path.first, path.second) == ("a", "b")
        assert isinstance(strategy, strategy_cls)

    @pytest.mark.parametrize("key", ["nofolder", "a/b/c", "/b", "a/", ""])
    def test_malformed_key(self, dispatcher: RetrievalDispatcher, key: str) -> None:
        with pytest.raises(MalformedKeyError):
            dispatcher.plan(key, "SECRET")

    @pytest.mark.parametrize("retrieval_type", ["CERTIFICATE", "secret", ""])
    def test_unsupported_type(
        self, dispatcher: RetrievalDispatcher, retrieval_type: str
    ) -> None:
        with pytest.raises(UnsupportedRetrievalTypeError) as exc_info:
            dispatcher.plan("a/b", retrieval_type)

        assert exc_info.value.context["retrieval_type"] == retrieval_type

    def test_key_checked_before_type(self, dispatcher: RetrievalDispatcher) -> None:
        with pytest.raises(MalformedKeyError):
            dispatcher.plan("a/b/c", "CERTIFICATE")

    def test_keys_split_on_slash_only(self, dispatcher: RetrievalDispatcher) -> None:
        with pytest.raises(MalformedKeyError):
            dispatcher.plan("folder|title", "SECRET")


class TestFetch:
    async def test_routes_to_secret_strategy(
        self,
        dispatcher: RetrievalDispatcher,
        vault: FakePasswordSafeVault,
        session: ModelAuthSession,
    ) -> None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(vault)) as client:
            value = await dispatcher.fetch(
                client, session, "prod/db-password", "SECRET", 1024
            )

        assert value == b"s3cret-value"

    async def test_separator_only_reaches_the_vault(
        self,
        dispatcher: RetrievalDispatcher,
        vault: FakePasswordSafeVault,
        session: ModelAuthSession,
    ) -> None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(vault)) as client:
            value = await dispatcher.fetch(
                client, session, "prod/db-password", "SECRET", 1024, separator="|"
            )

        params = vault.requests[0].url.params
        assert value == b"s3cret-value"
        assert (params["path"], params["title"]) == ("prod", "db-password")
        assert params["separator"] == "|"

    async def test_routes_to_managed_account_strategy(
        self,
        dispatcher: RetrievalDispatcher,
        vault: FakePasswordSafeVault,
        session: ModelAuthSession,
    ) -> None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(vault)) as client:
            value = await dispatcher.fetch(
                client, session, "db01/svc_app", "MANAGED_ACCOUNT", 1024
            )

        assert value == b"managed-pass"

    async def test_invalid_request_sends_nothing(
        self,
        dispatcher: RetrievalDispatcher,
        vault: FakePasswordSafeVault,
        session: ModelAuthSession,
    ) -> None:
        async with httpx.AsyncClient(transport=httpx.MockTransport(vault)) as client:
            with pytest.raises(UnsupportedRetrievalTypeError):
                await dispatcher.fetch(client, session, "prod/db-password", "CERT", 1024)
            with pytest.raises(MalformedKeyError):
                await dispatcher.fetch(client, session, "prod", "SECRET", 1024)

        assert vault.requests == []
