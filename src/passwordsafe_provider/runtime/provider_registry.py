# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Provider Registry - explicit registration of secret store providers.

The orchestrator looks providers up by the name of the block in a store's
``spec.provider`` section (``passwordsafe`` for this package). Nothing is
registered at import time: callers build a ProviderRegistry and either
register providers themselves or call register_default_providers().

Example Usage:
    ```python
    from passwordsafe_provider.runtime import (
        PROVIDER_NAME_PASSWORD_SAFE,
        ProviderRegistry,
        register_default_providers,
    )

    registry = ProviderRegistry()
    register_default_providers(registry)

    provider = registry.get(PROVIDER_NAME_PASSWORD_SAFE)
    warnings = provider.validate_store(store)
    client = provider.new_client(store, kv_store, store.namespace)
    ```
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from passwordsafe_provider.errors import (
    ModelInfraErrorContext,
    PasswordSafeProviderError,
)

if TYPE_CHECKING:
    from passwordsafe_provider.protocols import ProtocolSecretStoreProvider

logger = logging.getLogger(__name__)

PROVIDER_NAME_PASSWORD_SAFE: str = "passwordsafe"
"""Registry name of the Password Safe provider (matches the manifest block)."""


class RegistryError(PasswordSafeProviderError):
    """Error raised when provider registry operations fail.

    Example:
        >>> registry = ProviderRegistry()
        >>> try:
        ...     registry.get("unknown")
        ... except RegistryError as e:
        ...     print(e.context["provider_name"])
        unknown
    """

    def __init__(
        self,
        message: str,
        provider_name: str | None = None,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        if provider_name is not None:
            extra_context["provider_name"] = provider_name
        super().__init__(
            message=message,
            context=context,
            **extra_context,
        )


class ProviderRegistry:
    """Thread-safe mapping of provider name to provider instance.

    Registering a name twice replaces the earlier provider.

    Example:
        >>> registry = ProviderRegistry()
        >>> registry.register("passwordsafe", PasswordSafeProvider())
        >>> registry.list_providers()
        ['passwordsafe']
    """

    def __init__(self) -> None:
        self._registry: dict[str, ProtocolSecretStoreProvider] = {}
        self._lock: threading.Lock = threading.Lock()

    def register(self, name: str, provider: ProtocolSecretStoreProvider) -> None:
        """Register ``provider`` under ``name``.

        Raises:
            RegistryError: If ``name`` is empty
        """
        if not name:
            raise RegistryError("Provider name must not be empty", provider_name=name)
        with self._lock:
            replaced = name in self._registry
            self._registry[name] = provider
        logger.debug(
            "Registered secret store provider",
            extra={"provider_name": name, "replaced": replaced},
        )

    def get(self, name: str) -> ProtocolSecretStoreProvider:
        """Return the provider registered under ``name``.

        Raises:
            RegistryError: If no provider is registered under ``name``
        """
        with self._lock:
            provider = self._registry.get(name)

        if provider is None:
            registered = self.list_providers()
            raise RegistryError(
                f"No provider registered under name: {name!r}. "
                f"Registered providers: {registered}",
                provider_name=name,
                registered_providers=registered,
            )
        return provider

    def list_providers(self) -> list[str]:
        """Registered provider names, sorted alphabetically."""
        with self._lock:
            return sorted(self._registry.keys())

    def is_registered(self, name: str) -> bool:
        with self._lock:
            return name in self._registry

    def unregister(self, name: str) -> bool:
        """Remove a registration.

        Returns:
            True if the provider was removed, False if it was not registered
        """
        with self._lock:
            return self._registry.pop(name, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._registry.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._registry)

    def __contains__(self, name: str) -> bool:
        return self.is_registered(name)


def register_default_providers(registry: ProviderRegistry) -> None:
    """Register every provider shipped with this package.

    Args:
        registry: Registry to populate
    """
    # Local import: the provider module imports from this package.
    from passwordsafe_provider.providers.provider_password_safe import (
        PasswordSafeProvider,
    )

    registry.register(PROVIDER_NAME_PASSWORD_SAFE, PasswordSafeProvider())


__all__: list[str] = [
    "PROVIDER_NAME_PASSWORD_SAFE",
    "ProviderRegistry",
    "RegistryError",
    "register_default_providers",
]
