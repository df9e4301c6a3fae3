# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pytest configuration and shared fixtures for passwordsafe_provider tests."""

from __future__ import annotations

import pytest

from passwordsafe_provider.runtime import InMemoryKeyValueStore
from tests.helpers import FakeClock, FakePasswordSafeVault, FixedRandom


@pytest.fixture
def fake_clock() -> FakeClock:
    """Monotonic clock advanced only by awaited sleeps."""
    return FakeClock()


@pytest.fixture
def fixed_rng() -> FixedRandom:
    """Random source with random() == 0.5, i.e. no jitter."""
    return FixedRandom(0.5)


@pytest.fixture
def vault() -> FakePasswordSafeVault:
    """Fake vault with one text secret, one file secret and one managed account."""
    fake = FakePasswordSafeVault()
    fake.add_secret("prod", "db-password", "s3cret-value")
    fake.add_file_secret("prod", "tls-bundle", b"-----BEGIN CERTIFICATE-----\n")
    fake.add_managed_account("db01", "svc_app", "managed-pass")
    return fake


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    """Key-value store holding the credentials referenced by store_manifest()."""
    store = InMemoryKeyValueStore()
    store.put("team-a", "ps-creds", {"clientsecret": b"client-secret"})
    return store
