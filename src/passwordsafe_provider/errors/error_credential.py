# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Credential Resolution Error Classes.

Raised while value-or-reference descriptors are turned into concrete
credential strings. Each error names the credential field it was resolving
so a failure can be diagnosed without reading logs.
"""

from __future__ import annotations

from passwordsafe_provider.enums import EnumProviderErrorCode
from passwordsafe_provider.errors.infra_errors import SecretResolutionError
from passwordsafe_provider.errors.model_infra_error_context import (
    ModelInfraErrorContext,
)


class CredentialResolutionError(SecretResolutionError):
    """Base class for failures resolving a provider credential.

    Example:
        >>> raise NoSuchKeyError(
        ...     'no such key in secret: "id"',
        ...     field_name="client_id",
        ...     secret_name="creds",
        ...     secret_key="id",
        ... )
    """

    def __init__(
        self,
        message: str,
        context: ModelInfraErrorContext | None = None,
        field_name: str | None = None,
        **extra_context: object,
    ) -> None:
        if field_name is not None:
            extra_context["field_name"] = field_name
        super().__init__(message, context=context, **extra_context)


class ConflictingCredentialSourceError(CredentialResolutionError):
    """Both a literal value and a secret reference were configured."""

    default_error_code = EnumProviderErrorCode.CONFLICTING_CREDENTIAL_SOURCE


class MissingCredentialSourceError(CredentialResolutionError):
    """Neither a literal value nor a secret reference was configured."""

    default_error_code = EnumProviderErrorCode.MISSING_SOURCE


class MissingSecretNameError(CredentialResolutionError):
    """A secret reference has an empty name."""

    default_error_code = EnumProviderErrorCode.MISSING_SECRET_NAME


class MissingSecretKeyError(CredentialResolutionError):
    """A secret reference has an empty key."""

    default_error_code = EnumProviderErrorCode.MISSING_SECRET_KEY


class StoreLookupFailedError(CredentialResolutionError):
    """The key-value store lookup raised (not found, transport failure)."""

    default_error_code = EnumProviderErrorCode.STORE_LOOKUP_FAILED


class NoSuchKeyError(CredentialResolutionError):
    """The referenced secret exists but does not hold the requested key."""

    default_error_code = EnumProviderErrorCode.NO_SUCH_KEY


__all__: list[str] = [
    "ConflictingCredentialSourceError",
    "CredentialResolutionError",
    "MissingCredentialSourceError",
    "MissingSecretKeyError",
    "MissingSecretNameError",
    "NoSuchKeyError",
    "StoreLookupFailedError",
]
