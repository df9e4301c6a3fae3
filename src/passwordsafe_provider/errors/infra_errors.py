# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure-Specific Error Classes.

This module defines the base error classes for the passwordsafe_provider
package.

Error Hierarchy:
    PasswordSafeProviderError (base provider error)
    ├── ProtocolConfigurationError
    ├── SecretResolutionError
    ├── InfraConnectionError
    ├── InfraTimeoutError
    ├── InfraAuthenticationError
    ├── InfraUnavailableError
    ├── InfraRequestRejectedError
    └── OperationNotImplementedError

All errors:
    - Use EnumProviderErrorCode for error classification
    - Support proper error chaining with `raise ... from e`
    - Include structured context for debugging
    - Support correlation IDs for request tracking
    - Accept ModelInfraErrorContext for bundled context parameters
"""

from __future__ import annotations

from uuid import UUID

from passwordsafe_provider.enums import EnumProviderErrorCode
from passwordsafe_provider.errors.model_infra_error_context import (
    ModelInfraErrorContext,
)


class PasswordSafeProviderError(Exception):
    """Base error class for all provider errors.

    Structured Fields (via ModelInfraErrorContext):
        transport_type: Type of transport (passwordsafe, kv_store, etc.)
        operation: Operation being performed
        correlation_id: Request correlation ID for tracking
        target_name: Target resource/endpoint name

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.PASSWORD_SAFE,
        ...     operation="get_secret",
        ...     target_name="vault.example.com",
        ... )
        >>> raise PasswordSafeProviderError("Operation failed", context=context)
    """

    default_error_code: EnumProviderErrorCode = EnumProviderErrorCode.OPERATION_FAILED

    def __init__(
        self,
        message: str,
        error_code: EnumProviderErrorCode | None = None,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        """Initialize the error with structured fields.

        Args:
            message: Human-readable error message
            error_code: Error code (defaults to the class default_error_code)
            context: Bundled infrastructure context (transport_type, operation, etc.)
            **extra_context: Additional context information
        """
        structured_context: dict[str, object] = dict(extra_context)

        correlation_id: UUID | None = None
        if context is not None:
            if context.transport_type is not None:
                structured_context["transport_type"] = context.transport_type
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_name is not None:
                structured_context["target_name"] = context.target_name
            correlation_id = context.correlation_id

        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.correlation_id = correlation_id
        self.context = structured_context

    def __str__(self) -> str:
        parts = [f"[{self.error_code.value}] {self.message}"]
        details = {
            k: getattr(v, "value", v)
            for k, v in self.context.items()
            if k not in ("transport_type", "target_name")
        }
        if details:
            rendered = ", ".join(f"{k}={v}" for k, v in sorted(details.items()))
            parts.append(f"({rendered})")
        return " ".join(parts)


class ProtocolConfigurationError(PasswordSafeProviderError):
    """Raised when store or provider configuration validation fails.

    Used for missing store levels, unparsable endpoints and invalid
    configuration values. Never retried.
    """

    default_error_code = EnumProviderErrorCode.INVALID_CONFIGURATION

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=self.default_error_code,
            context=context,
            **extra_context,
        )


class SecretResolutionError(PasswordSafeProviderError):
    """Raised when secret or credential resolution fails.

    Example:
        >>> raise SecretResolutionError(
        ...     "Secret not found in key-value store",
        ...     context=context,
        ...     secret_name="passwordsafe-creds",
        ... )
    """

    default_error_code = EnumProviderErrorCode.RESOURCE_NOT_FOUND

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=self.default_error_code,
            context=context,
            **extra_context,
        )


class InfraConnectionError(PasswordSafeProviderError):
    """Raised when the vault cannot be reached (DNS, refused, TLS handshake)."""

    default_error_code = EnumProviderErrorCode.CONNECTION_ERROR

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=self.default_error_code,
            context=context,
            **extra_context,
        )


class InfraTimeoutError(PasswordSafeProviderError):
    """Raised when a vault request exceeds the client timeout.

    Example:
        >>> raise InfraTimeoutError(
        ...     "Token request exceeded timeout",
        ...     context=context,
        ...     timeout_seconds=5,
        ... )
    """

    default_error_code = EnumProviderErrorCode.TIMEOUT_ERROR

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=self.default_error_code,
            context=context,
            **extra_context,
        )


class InfraAuthenticationError(PasswordSafeProviderError):
    """Raised when the vault rejects credentials or an access token."""

    default_error_code = EnumProviderErrorCode.AUTHENTICATION_ERROR

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=self.default_error_code,
            context=context,
            **extra_context,
        )


class InfraUnavailableError(PasswordSafeProviderError):
    """Raised when the vault answers with a server-side failure (5xx)."""

    default_error_code = EnumProviderErrorCode.SERVICE_UNAVAILABLE

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=self.default_error_code,
            context=context,
            **extra_context,
        )


class InfraRequestRejectedError(PasswordSafeProviderError):
    """Raised when the vault rejects a request for a reason other than auth."""

    default_error_code = EnumProviderErrorCode.REQUEST_REJECTED

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=self.default_error_code,
            context=context,
            **extra_context,
        )


class OperationNotImplementedError(PasswordSafeProviderError):
    """Raised by operations a read-only store does not support.

    Example:
        >>> raise OperationNotImplementedError(
        ...     "push_secret is not implemented by a read-only store",
        ...     operation_name="push_secret",
        ... )
    """

    default_error_code = EnumProviderErrorCode.NOT_IMPLEMENTED

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=self.default_error_code,
            context=context,
            **extra_context,
        )


__all__ = [
    "InfraAuthenticationError",
    "InfraConnectionError",
    "InfraRequestRejectedError",
    "InfraTimeoutError",
    "InfraUnavailableError",
    "OperationNotImplementedError",
    "PasswordSafeProviderError",
    "ProtocolConfigurationError",
    "SecretResolutionError",
]
