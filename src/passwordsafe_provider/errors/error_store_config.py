# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Store Configuration Error Classes.

Raised by the store validator while a secret store is being accepted.
None of these are retried and none of them involve network I/O.
"""

from __future__ import annotations

from passwordsafe_provider.enums import EnumProviderErrorCode
from passwordsafe_provider.errors.infra_errors import ProtocolConfigurationError
from passwordsafe_provider.errors.model_infra_error_context import (
    ModelInfraErrorContext,
)


class NilStoreError(ProtocolConfigurationError):
    """No store object was handed to the validator."""

    default_error_code = EnumProviderErrorCode.NIL_STORE


class MissingStoreSpecError(ProtocolConfigurationError):
    """The store has no spec block."""

    default_error_code = EnumProviderErrorCode.MISSING_SPEC


class MissingProviderError(ProtocolConfigurationError):
    """The store spec has no provider block."""

    default_error_code = EnumProviderErrorCode.MISSING_PROVIDER


class MissingProviderBlockError(ProtocolConfigurationError):
    """The provider block has no Password Safe section."""

    default_error_code = EnumProviderErrorCode.MISSING_PROVIDER_BLOCK

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        store_name: str | None = None,
        **extra_context: object,
    ) -> None:
        if store_name is not None:
            extra_context["store_name"] = store_name
        super().__init__(message, context=context, **extra_context)


class InvalidHostURLError(ProtocolConfigurationError):
    """The API URL does not parse or has no host component.

    The offending URL is kept in context; it is configuration, not a secret.
    """

    default_error_code = EnumProviderErrorCode.INVALID_HOST_URL

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        api_url: str | None = None,
        **extra_context: object,
    ) -> None:
        if api_url is not None:
            extra_context["api_url"] = api_url
        super().__init__(message, context=context, **extra_context)


__all__: list[str] = [
    "InvalidHostURLError",
    "MissingProviderBlockError",
    "MissingProviderError",
    "MissingStoreSpecError",
    "NilStoreError",
]
