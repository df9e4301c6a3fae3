# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Authentication retry exhaustion error."""

from __future__ import annotations

from passwordsafe_provider.enums import EnumProviderErrorCode
from passwordsafe_provider.errors.infra_errors import InfraAuthenticationError
from passwordsafe_provider.errors.model_infra_error_context import (
    ModelInfraErrorContext,
)


class AuthenticationExhaustedError(InfraAuthenticationError):
    """The authentication handshake kept failing until the backoff stopped.

    The last underlying failure is available as ``last_error`` and is also
    chained as ``__cause__`` by the authenticator.

    Example:
        >>> raise AuthenticationExhaustedError(
        ...     "Authentication retries exhausted",
        ...     context=context,
        ...     last_error=InfraUnavailableError("Server error (500)"),
        ...     attempts=12,
        ...     elapsed_seconds=871.4,
        ... ) from last_error
    """

    default_error_code = EnumProviderErrorCode.AUTHENTICATION_EXHAUSTED

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        last_error: BaseException | None = None,
        **extra_context: object,
    ) -> None:
        self.last_error = last_error
        if last_error is not None:
            extra_context["last_error_type"] = type(last_error).__name__
        super().__init__(message, context=context, **extra_context)


__all__: list[str] = ["AuthenticationExhaustedError"]
