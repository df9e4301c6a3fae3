# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definitions for secret store providers and their clients.

The orchestrator keeps one provider per backend type in a ProviderRegistry.
For every secret store resource it asks the provider to validate the store
and to build a client; the client then serves retrieval requests until it is
closed.

Lifecycle:
    provider.validate_store(store)          # at store admission, no I/O
    client = provider.new_client(store, kv_store, namespace)
    value = await client.get_secret(ref)    # any number of times
    await client.close()                    # idempotent

Error Handling:
    Operations a provider does not support raise OperationNotImplementedError
    instead of terminating the process.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from passwordsafe_provider.enums import EnumStoreCapability, EnumValidationResult
    from passwordsafe_provider.models import ModelRemoteRef, ModelSecretStore
    from passwordsafe_provider.protocols.protocol_key_value_store import (
        ProtocolKeyValueStore,
    )

__all__ = [
    "ProtocolSecretStoreProvider",
    "ProtocolSecretsClient",
]


@runtime_checkable
class ProtocolSecretsClient(Protocol):
    """Per-store client that reads (and possibly writes) remote secrets."""

    async def get_secret(
        self,
        ref: ModelRemoteRef | str,
        *,
        timeout_seconds: float | None = None,
    ) -> bytes:
        """Fetch one secret value as raw bytes."""
        ...

    async def get_secret_map(self, ref: ModelRemoteRef | str) -> dict[str, bytes]:
        """Fetch one secret and expand it into key/value pairs."""
        ...

    async def get_all_secrets(self, find: object) -> dict[str, bytes]:
        """Fetch every secret matching a search."""
        ...

    async def push_secret(self, secret: object, data: object) -> None:
        """Write a secret to the remote store."""
        ...

    async def delete_secret(self, ref: object) -> None:
        """Delete a secret from the remote store."""
        ...

    async def secret_exists(self, ref: object) -> bool:
        """Check whether a remote secret exists."""
        ...

    def validate(self) -> EnumValidationResult:
        """Report whether the client is usable."""
        ...

    async def close(self) -> None:
        """Release resources; safe to call more than once."""
        ...


@runtime_checkable
class ProtocolSecretStoreProvider(Protocol):
    """Factory for secrets clients of one backend type."""

    def capabilities(self) -> EnumStoreCapability:
        """Operations the provider's clients support."""
        ...

    def validate_store(self, store: ModelSecretStore | None) -> list[str]:
        """Check a store's shape without I/O; return warnings or raise."""
        ...

    def new_client(
        self,
        store: ModelSecretStore,
        kv_store: ProtocolKeyValueStore,
        namespace: str,
    ) -> ProtocolSecretsClient:
        """Resolve credentials and build a client for ``store``."""
        ...
