# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Password Safe Provider Models Module.

Exports:
    ModelAuthSession: Access token from one authentication handshake
    ModelBackoffConfig: Exponential backoff schedule for authentication
    ModelManagedAccount: Managed account lookup result
    ModelPasswordSafeProviderConfig: Provider block of a store manifest
    ModelRemoteRef: Orchestrator reference to one remote secret
    ModelResolvedCredentials: Concrete credentials held by a client
    ModelSecretKeyPath: Two-segment secret key
    ModelSecretKeySelector: Reference into the key-value store
    ModelSecretPayload: Secrets Safe entry
    ModelSecretStore, ModelSecretStoreSpec, ModelSecretStoreProvider: Store resource
    ModelSecretValueDescriptor: Value-or-reference credential descriptor
"""

from passwordsafe_provider.models.model_auth_session import ModelAuthSession
from passwordsafe_provider.models.model_backoff_config import ModelBackoffConfig
from passwordsafe_provider.models.model_provider_config import (
    ModelPasswordSafeProviderConfig,
)
from passwordsafe_provider.models.model_remote_ref import ModelRemoteRef
from passwordsafe_provider.models.model_resolved_credentials import (
    ModelResolvedCredentials,
)
from passwordsafe_provider.models.model_secret_key_path import ModelSecretKeyPath
from passwordsafe_provider.models.model_secret_key_selector import (
    ModelSecretKeySelector,
)
from passwordsafe_provider.models.model_secret_store import (
    ModelSecretStore,
    ModelSecretStoreProvider,
    ModelSecretStoreSpec,
)
from passwordsafe_provider.models.model_secret_value_descriptor import (
    ModelSecretValueDescriptor,
)
from passwordsafe_provider.models.model_vault_payloads import (
    ModelManagedAccount,
    ModelSecretPayload,
)

__all__: list[str] = [
    "ModelAuthSession",
    "ModelBackoffConfig",
    "ModelManagedAccount",
    "ModelPasswordSafeProviderConfig",
    "ModelRemoteRef",
    "ModelResolvedCredentials",
    "ModelSecretKeyPath",
    "ModelSecretKeySelector",
    "ModelSecretPayload",
    "ModelSecretStore",
    "ModelSecretStoreProvider",
    "ModelSecretStoreSpec",
    "ModelSecretValueDescriptor",
]
