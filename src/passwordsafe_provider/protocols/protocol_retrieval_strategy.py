# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for secret retrieval strategies.

A strategy knows how to turn a two-segment key into one secret value using
an already authenticated vault session. Strategies are read-only and never
return a placeholder value: every failure is raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    import httpx

    from passwordsafe_provider.models import ModelAuthSession, ModelSecretKeyPath

__all__ = [
    "ProtocolRetrievalStrategy",
]


@runtime_checkable
class ProtocolRetrievalStrategy(Protocol):
    """Fetches one secret addressed by a two-segment key."""

    async def fetch(
        self,
        client: httpx.AsyncClient,
        session: ModelAuthSession,
        path: ModelSecretKeyPath,
        *,
        separator: str,
        max_secret_size_bytes: int,
        correlation_id: UUID,
    ) -> bytes:
        """Return the secret value as raw bytes.

        Args:
            client: HTTP client for the vault
            session: Authenticated session
            path: Parsed key
            separator: Folder separator passed to the vault API
            max_secret_size_bytes: Upper bound for file-backed secrets
            correlation_id: Correlation ID for logs and errors

        Raises:
            RetrievalError: Nothing at the path, or the value is too large
            PasswordSafeProviderError: Transport and status failures
        """
        ...
