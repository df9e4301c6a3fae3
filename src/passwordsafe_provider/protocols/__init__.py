# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definitions for the Password Safe provider.

Exports:
    ProtocolKeyValueStore: External key-value store for indirected credentials
    ProtocolRetrievalStrategy: Fetches one secret with an authenticated session
    ProtocolSecretStoreProvider: Factory registered with the ProviderRegistry
    ProtocolSecretsClient: Per-store client serving retrieval requests
"""

from passwordsafe_provider.protocols.protocol_key_value_store import (
    ProtocolKeyValueStore,
)
from passwordsafe_provider.protocols.protocol_retrieval_strategy import (
    ProtocolRetrievalStrategy,
)
from passwordsafe_provider.protocols.protocol_secrets_client import (
    ProtocolSecretsClient,
    ProtocolSecretStoreProvider,
)

__all__: list[str] = [
    "ProtocolKeyValueStore",
    "ProtocolRetrievalStrategy",
    "ProtocolSecretStoreProvider",
    "ProtocolSecretsClient",
]
