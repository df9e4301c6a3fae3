# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Retrieval dispatch from retrieval type to strategy.

The dispatcher holds a closed mapping from EnumRetrievalType to a strategy.
Before any request is sent it checks, in order:

1. The key splits into exactly two non-empty segments (MalformedKeyError)
2. The configured retrieval type has a strategy (UnsupportedRetrievalTypeError)

Example:
    >>> dispatcher = RetrievalDispatcher.for_api_url(credentials.base_url)
    >>> value = await dispatcher.fetch(
    ...     client, session, "prod/db-password", "SECRET",
    ...     max_secret_size_bytes=5_000_000, separator="/",
    ... )
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from uuid import UUID, uuid4

import httpx

from passwordsafe_provider.enums import EnumInfraTransportType, EnumRetrievalType
from passwordsafe_provider.errors import (
    ModelInfraErrorContext,
    UnsupportedRetrievalTypeError,
)
from passwordsafe_provider.handlers.handler_managed_account_strategy import (
    ManagedAccountStrategy,
)
from passwordsafe_provider.handlers.handler_secret_strategy import SecretsSafeStrategy
from passwordsafe_provider.models import ModelAuthSession, ModelSecretKeyPath
from passwordsafe_provider.protocols import ProtocolRetrievalStrategy

logger = logging.getLogger(__name__)


class RetrievalDispatcher:
    """Routes a key to the strategy for the configured retrieval type.

    Attributes:
        strategies: Read-only view of the dispatch table
    """

    def __init__(
        self,
        strategies: Mapping[EnumRetrievalType, ProtocolRetrievalStrategy],
    ) -> None:
        self.strategies: Mapping[EnumRetrievalType, ProtocolRetrievalStrategy] = (
            MappingProxyType(dict(strategies))
        )

    @classmethod
    def for_api_url(cls, api_url: str) -> RetrievalDispatcher:
        """Build the standard dispatch table for one vault."""
        return cls(
            {
                EnumRetrievalType.SECRET: SecretsSafeStrategy(api_url),
                EnumRetrievalType.MANAGED_ACCOUNT: ManagedAccountStrategy(api_url),
            }
        )

    def plan(
        self,
        key: str,
        retrieval_type: str | EnumRetrievalType,
        correlation_id: UUID | None = None,
    ) -> tuple[ModelSecretKeyPath, ProtocolRetrievalStrategy]:
        """Validate a request without I/O.

        Returns:
            Parsed key and the strategy that will serve it

        Raises:
            MalformedKeyError: Key does not have exactly two segments
            UnsupportedRetrievalTypeError: No strategy for ``retrieval_type``
        """
        path = ModelSecretKeyPath.parse(key)
        try:
            kind = EnumRetrievalType(retrieval_type)
        except ValueError:
            kind = None
        strategy = self.strategies.get(kind) if kind is not None else None
        if strategy is None:
            raise UnsupportedRetrievalTypeError(
                f"Unsupported retrieval type: {str(retrieval_type)!r}. "
                f"Supported: {sorted(k.value for k in self.strategies)}",
                context=ModelInfraErrorContext.with_correlation(
                    correlation_id=correlation_id,
                    transport_type=EnumInfraTransportType.RUNTIME,
                    operation="dispatch_retrieval",
                ),
                secret_key=key,
                retrieval_type=str(retrieval_type),
            )
        return path, strategy

    async def fetch(
        self,
        client: httpx.AsyncClient,
        session: ModelAuthSession,
        key: str,
        retrieval_type: str | EnumRetrievalType,
        max_secret_size_bytes: int,
        separator: str = "/",
        correlation_id: UUID | None = None,
    ) -> bytes:
        """Fetch ``key`` with the strategy for ``retrieval_type``.

        Raises:
            MalformedKeyError: Key does not have exactly two segments
            UnsupportedRetrievalTypeError: No strategy for ``retrieval_type``
            RetrievalError: Strategy failure
            PasswordSafeProviderError: Transport and status failures
        """
        correlation_id = correlation_id or uuid4()
        path, strategy = self.plan(key, retrieval_type, correlation_id)
        logger.debug(
            "Dispatching secret retrieval",
            extra={
                "secret_key": key,
                "retrieval_type": str(retrieval_type),
                "strategy": type(strategy).__name__,
                "correlation_id": str(correlation_id),
            },
        )
        return await strategy.fetch(
            client,
            session,
            path,
            separator=separator,
            max_secret_size_bytes=max_secret_size_bytes,
            correlation_id=correlation_id,
        )


__all__: list[str] = ["RetrievalDispatcher"]
