# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Retrieval Error Classes.

Raised while a secret key is dispatched to a retrieval strategy or while a
strategy talks to the vault. Surfaced immediately, never retried.
"""

from __future__ import annotations

from passwordsafe_provider.enums import EnumProviderErrorCode
from passwordsafe_provider.errors.infra_errors import PasswordSafeProviderError
from passwordsafe_provider.errors.model_infra_error_context import (
    ModelInfraErrorContext,
)


class RetrievalError(PasswordSafeProviderError):
    """Base class for secret retrieval failures."""

    default_error_code = EnumProviderErrorCode.OPERATION_FAILED

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        secret_key: str | None = None,
        **extra_context: object,
    ) -> None:
        if secret_key is not None:
            extra_context["secret_key"] = secret_key
        super().__init__(
            message=message,
            error_code=self.default_error_code,
            context=context,
            **extra_context,
        )


class MalformedKeyError(RetrievalError):
    """The key does not split into exactly two non-empty segments."""

    default_error_code = EnumProviderErrorCode.MALFORMED_KEY


class UnsupportedRetrievalTypeError(RetrievalError):
    """The configured retrieval type has no strategy."""

    default_error_code = EnumProviderErrorCode.UNSUPPORTED_RETRIEVAL_TYPE


class SecretNotFoundError(RetrievalError):
    """The vault holds nothing at the requested path."""

    default_error_code = EnumProviderErrorCode.SECRET_NOT_FOUND


class SecretTooLargeError(RetrievalError):
    """A file-backed secret exceeds the configured size limit."""

    default_error_code = EnumProviderErrorCode.SECRET_TOO_LARGE


__all__: list[str] = [
    "MalformedKeyError",
    "RetrievalError",
    "SecretNotFoundError",
    "SecretTooLargeError",
    "UnsupportedRetrievalTypeError",
]
