# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Test helpers for passwordsafe_provider unit tests.

Available Utilities:
    FakeClock: Monotonic clock with an awaitable sleep that advances it
    FixedRandom: random.Random returning a constant, for exact backoff delays
    FakePasswordSafeVault: httpx.MockTransport handler emulating the vault API
    make_credentials: ModelResolvedCredentials with test defaults
    mock_client_factory: HTTP client factory bound to a FakePasswordSafeVault
    store_manifest: SecretStore manifest mapping with test defaults
"""

from tests.helpers.password_safe_fakes import (
    API_PREFIX,
    API_URL,
    FakeClock,
    FakePasswordSafeVault,
    FixedRandom,
    make_credentials,
    mock_client_factory,
    store_manifest,
)

__all__ = [
    "API_PREFIX",
    "API_URL",
    "FakeClock",
    "FakePasswordSafeVault",
    "FixedRandom",
    "make_credentials",
    "mock_client_factory",
    "store_manifest",
]
