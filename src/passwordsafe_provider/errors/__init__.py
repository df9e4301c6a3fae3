# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Password Safe Provider Errors Module.

Exports:
    ModelInfraErrorContext: Configuration model for bundled error context
    PasswordSafeProviderError: Base provider error class
    ProtocolConfigurationError: Store configuration validation errors
    SecretResolutionError: Secret/credential resolution errors
    InfraConnectionError, InfraTimeoutError, InfraUnavailableError,
    InfraRequestRejectedError: Vault transport errors
    InfraAuthenticationError: Vault authentication errors
    AuthenticationExhaustedError: Authentication retry exhaustion
    RetrievalError: Secret retrieval errors
    OperationNotImplementedError: Operations a read-only store rejects

Correlation ID Assignment:
    Every vault call carries a correlation_id. Propagate it from the caller
    when available, otherwise generate one with uuid4() and include it in the
    error context of anything raised during that call.

Error Sanitization Guidelines:
    NEVER include in error messages or context:
        - Client secrets, access tokens, retrieved secret values
        - Certificate private keys

    SAFE to include:
        - Credential field names (e.g., "client_id")
        - Secret reference names, keys and namespaces
        - Vault host names and API paths
        - Status codes, retry counts and timeout values

    Example - BAD (exposes credentials)::

        raise InfraAuthenticationError(
            f"Token request failed for secret={client_secret}",  # NEVER DO THIS
            context=context,
        )

    Example - GOOD (sanitized)::

        raise InfraAuthenticationError(
            "Token request rejected",
            context=context,
            status_code=401,
        )
"""

from passwordsafe_provider.errors.error_authentication import (
    AuthenticationExhaustedError,
)
from passwordsafe_provider.errors.error_credential import (
    ConflictingCredentialSourceError,
    CredentialResolutionError,
    MissingCredentialSourceError,
    MissingSecretKeyError,
    MissingSecretNameError,
    NoSuchKeyError,
    StoreLookupFailedError,
)
from passwordsafe_provider.errors.error_retrieval import (
    MalformedKeyError,
    RetrievalError,
    SecretNotFoundError,
    SecretTooLargeError,
    UnsupportedRetrievalTypeError,
)
from passwordsafe_provider.errors.error_store_config import (
    InvalidHostURLError,
    MissingProviderBlockError,
    MissingProviderError,
    MissingStoreSpecError,
    NilStoreError,
)
from passwordsafe_provider.errors.infra_errors import (
    InfraAuthenticationError,
    InfraConnectionError,
    InfraRequestRejectedError,
    InfraTimeoutError,
    InfraUnavailableError,
    OperationNotImplementedError,
    PasswordSafeProviderError,
    ProtocolConfigurationError,
    SecretResolutionError,
)
from passwordsafe_provider.errors.model_infra_error_context import (
    ModelInfraErrorContext,
)

__all__: list[str] = [
    # Configuration model
    "ModelInfraErrorContext",
    # Base classes
    "PasswordSafeProviderError",
    "ProtocolConfigurationError",
    "SecretResolutionError",
    "InfraConnectionError",
    "InfraTimeoutError",
    "InfraAuthenticationError",
    "InfraUnavailableError",
    "InfraRequestRejectedError",
    "OperationNotImplementedError",
    # Store configuration
    "NilStoreError",
    "MissingStoreSpecError",
    "MissingProviderError",
    "MissingProviderBlockError",
    "InvalidHostURLError",
    # Credential resolution
    "CredentialResolutionError",
    "ConflictingCredentialSourceError",
    "MissingCredentialSourceError",
    "MissingSecretNameError",
    "MissingSecretKeyError",
    "StoreLookupFailedError",
    "NoSuchKeyError",
    # Authentication
    "AuthenticationExhaustedError",
    # Retrieval
    "RetrievalError",
    "MalformedKeyError",
    "UnsupportedRetrievalTypeError",
    "SecretNotFoundError",
    "SecretTooLargeError",
]
