# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Structural validation of secret store resources.

Runs when the orchestrator admits a store, before any credential is resolved
and before any client exists. Purely syntactic: no key-value store lookups
and no network calls.
"""

from __future__ import annotations

import logging
from urllib.parse import urlsplit
from uuid import UUID

from passwordsafe_provider.enums import EnumInfraTransportType, EnumRetrievalType
from passwordsafe_provider.errors import (
    InvalidHostURLError,
    MissingProviderBlockError,
    MissingProviderError,
    MissingStoreSpecError,
    ModelInfraErrorContext,
    NilStoreError,
)
from passwordsafe_provider.models import (
    ModelPasswordSafeProviderConfig,
    ModelSecretStore,
)

logger = logging.getLogger(__name__)


def validate_api_url(api_url: str, context: ModelInfraErrorContext) -> None:
    """Require an absolute URL with a non-empty host.

    Raises:
        InvalidHostURLError: If the URL does not parse or has no host
    """
    try:
        host = urlsplit(api_url).hostname
    except ValueError as e:
        raise InvalidHostURLError(
            "Invalid host URL",
            context=context,
            api_url=api_url,
        ) from e
    if not host:
        raise InvalidHostURLError(
            "Invalid host URL",
            context=context,
            api_url=api_url,
        )


def _collect_warnings(config: ModelPasswordSafeProviderConfig) -> list[str]:
    warnings: list[str] = []
    if urlsplit(config.api_url).scheme.lower() == "http":
        warnings.append("apiurl uses plain http; credentials are sent unencrypted")
    if not config.verify_ca:
        warnings.append("verifyCA is disabled; the vault certificate is not checked")
    if (config.certificate is None) != (config.certificate_key is None):
        warnings.append(
            "only one of certificate/certificatekey is set; mutual TLS stays off"
        )
    known = {member.value for member in EnumRetrievalType}
    if config.retrieval_type not in known:
        warnings.append(
            f"retrievaltype {config.retrieval_type!r} is not one of {sorted(known)}; "
            "retrievals will fail"
        )
    return warnings


def validate_store(
    store: ModelSecretStore | None,
    correlation_id: UUID | None = None,
) -> list[str]:
    """Validate the shape of a store and its Password Safe block.

    Args:
        store: Store to validate
        correlation_id: Correlation ID for error context

    Returns:
        Non-fatal warnings (empty when the store is clean)

    Raises:
        NilStoreError: No store given
        MissingStoreSpecError: Store has no spec
        MissingProviderError: Spec has no provider block
        MissingProviderBlockError: Provider block has no passwordsafe section
        InvalidHostURLError: apiurl does not parse or has no host
    """
    ctx = ModelInfraErrorContext.with_correlation(
        correlation_id=correlation_id,
        transport_type=EnumInfraTransportType.RUNTIME,
        operation="validate_store",
        target_name=store.name if store is not None else None,
    )

    if store is None:
        raise NilStoreError("nil store found", context=ctx)
    if store.spec is None:
        raise MissingStoreSpecError("store is missing spec", context=ctx)
    if store.spec.provider is None:
        raise MissingProviderError("storeSpec is missing provider", context=ctx)

    config = store.spec.provider.passwordsafe
    if config is None:
        raise MissingProviderBlockError(
            f"Invalid provider spec. Missing field in store {store.namespace}/{store.name}",
            context=ctx,
            store_name=store.name,
        )

    validate_api_url(config.api_url, ctx)

    warnings = _collect_warnings(config)
    for warning in warnings:
        logger.warning(
            "Store configuration warning: %s",
            warning,
            extra={
                "store_name": store.name,
                "namespace": store.namespace,
                "correlation_id": str(ctx.correlation_id),
            },
        )
    return warnings


__all__: list[str] = ["validate_api_url", "validate_store"]
