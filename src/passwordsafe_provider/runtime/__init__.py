# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Password Safe Provider Runtime Module.

Exports:
    CredentialResolver: Resolves value-or-reference credential descriptors
    ExponentialBackoffPolicy: Jittered exponential backoff with time budget
    InMemoryKeyValueStore: Dictionary-backed key-value store
    ProviderRegistry: Explicit provider registration
    validate_store: Structural store validation (no I/O)
    load_manifests, load_secret_store, load_key_value_store: YAML loading
"""

from passwordsafe_provider.runtime.backoff_policy import ExponentialBackoffPolicy
from passwordsafe_provider.runtime.credential_resolver import (
    CredentialResolver,
    validate_descriptor,
)
from passwordsafe_provider.runtime.key_value_store_inmemory import (
    InMemoryKeyValueStore,
)
from passwordsafe_provider.runtime.manifest_loader import (
    load_key_value_store,
    load_manifests,
    load_secret_store,
)
from passwordsafe_provider.runtime.provider_registry import (
    PROVIDER_NAME_PASSWORD_SAFE,
    ProviderRegistry,
    RegistryError,
    register_default_providers,
)
from passwordsafe_provider.runtime.store_validator import (
    validate_api_url,
    validate_store,
)

__all__: list[str] = [
    "CredentialResolver",
    "ExponentialBackoffPolicy",
    "InMemoryKeyValueStore",
    "PROVIDER_NAME_PASSWORD_SAFE",
    "ProviderRegistry",
    "RegistryError",
    "load_key_value_store",
    "load_manifests",
    "load_secret_store",
    "register_default_providers",
    "validate_api_url",
    "validate_descriptor",
    "validate_store",
]
