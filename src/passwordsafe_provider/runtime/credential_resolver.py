# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Credential resolution for Password Safe provider configuration.

CredentialResolver turns value-or-reference descriptors into concrete
strings. A descriptor either carries a literal value or points at a key in
the external key-value store; the store is only consulted for references.

Design Philosophy:
- Dumb and deterministic: one lookup per reference, no caching, no retries
- Validation before I/O: conflicting or incomplete descriptors never reach
  the store
- Construction-time only: a lookup failure fails the whole client build

Example:
    Resolve every credential of a provider block::

        resolver = CredentialResolver(kv_store)
        credentials = resolver.resolve_provider_credentials(
            store.provider_config,
            default_namespace=store.namespace,
        )

Security Considerations:
    - Resolved secret material is returned wrapped in SecretStr
    - Log records and errors name the field and the reference, never the value
"""

from __future__ import annotations

import logging
from uuid import UUID

from pydantic import SecretStr

from passwordsafe_provider.enums import EnumInfraTransportType
from passwordsafe_provider.errors import (
    ConflictingCredentialSourceError,
    CredentialResolutionError,
    MissingCredentialSourceError,
    MissingSecretKeyError,
    MissingSecretNameError,
    ModelInfraErrorContext,
    NoSuchKeyError,
    StoreLookupFailedError,
)
from passwordsafe_provider.models import (
    ModelPasswordSafeProviderConfig,
    ModelResolvedCredentials,
    ModelSecretValueDescriptor,
)
from passwordsafe_provider.protocols import ProtocolKeyValueStore

logger = logging.getLogger(__name__)


def validate_descriptor(
    descriptor: ModelSecretValueDescriptor,
    field_name: str,
    correlation_id: UUID | None = None,
) -> None:
    """Check that a descriptor names exactly one usable source.

    Args:
        descriptor: Descriptor to check
        field_name: Credential field the descriptor belongs to
        correlation_id: Correlation ID for error context

    Raises:
        ConflictingCredentialSourceError: Both value and reference are set
        MissingSecretNameError: Reference without a secret name
        MissingSecretKeyError: Reference without a key
        MissingCredentialSourceError: Neither value nor reference is set
    """
    ctx = ModelInfraErrorContext.with_correlation(
        correlation_id=correlation_id,
        transport_type=EnumInfraTransportType.RUNTIME,
        operation="validate_credential",
        target_name="credential_resolver",
    )
    ref = descriptor.secret_ref
    if ref is not None:
        if descriptor.value:
            raise ConflictingCredentialSourceError(
                "cannot specify both secret reference and value",
                context=ctx,
                field_name=field_name,
            )
        if not ref.name:
            raise MissingSecretNameError(
                "must specify a secret name",
                context=ctx,
                field_name=field_name,
            )
        if not ref.key:
            raise MissingSecretKeyError(
                "must specify a secret key",
                context=ctx,
                field_name=field_name,
                secret_name=ref.name,
            )
    elif not descriptor.value:
        raise MissingCredentialSourceError(
            "must specify either secret reference or direct value",
            context=ctx,
            field_name=field_name,
        )


class CredentialResolver:
    """Resolves credential descriptors against an external key-value store.

    Thread Safety:
        Stateless apart from the store reference; safe to share.
    """

    def __init__(self, kv_store: ProtocolKeyValueStore) -> None:
        """Initialize CredentialResolver.

        Args:
            kv_store: Store that secret references point into
        """
        self._kv_store = kv_store

    def resolve(
        self,
        descriptor: ModelSecretValueDescriptor | None,
        default_namespace: str,
        field_name: str,
        *,
        required: bool = True,
        correlation_id: UUID | None = None,
    ) -> str:
        """Resolve one descriptor to a string.

        Resolution order:
            1. Missing or empty descriptor: "" when optional, error when required
            2. Literal value: returned verbatim
            3. Reference: validated, then looked up once in the store

        Args:
            descriptor: Descriptor to resolve (None when not configured)
            default_namespace: Namespace for references that do not set one
            field_name: Credential field name for error context
            required: Whether an unset descriptor is an error
            correlation_id: Correlation ID for error context

        Returns:
            The resolved credential string

        Raises:
            CredentialResolutionError: Any subclass, see validate_descriptor,
                plus StoreLookupFailedError and NoSuchKeyError
        """
        if descriptor is None:
            descriptor = ModelSecretValueDescriptor()
        if not required and not descriptor.value and not descriptor.is_reference:
            return ""

        validate_descriptor(descriptor, field_name, correlation_id)

        ref = descriptor.secret_ref
        if ref is None:
            logger.debug(
                "Resolved credential from literal value",
                extra={"field_name": field_name, "source": "value"},
            )
            return descriptor.value

        namespace = ref.namespace or default_namespace

        ctx = ModelInfraErrorContext.with_correlation(
            correlation_id=correlation_id,
            transport_type=EnumInfraTransportType.KEY_VALUE_STORE,
            operation="resolve_credential",
            target_name=f"{namespace}/{ref.name}",
        )
        try:
            data = self._kv_store.get(namespace, ref.name)
        except Exception as e:
            raise StoreLookupFailedError(
                f"Failed to read secret {namespace}/{ref.name}: {type(e).__name__}",
                context=ctx,
                field_name=field_name,
                secret_name=ref.name,
                namespace=namespace,
            ) from e

        raw = data.get(ref.key)
        if raw is None:
            raise NoSuchKeyError(
                f"no such key in secret: {ref.key!r}",
                context=ctx,
                field_name=field_name,
                secret_name=ref.name,
                secret_key=ref.key,
                namespace=namespace,
            )

        if isinstance(raw, str):
            value = raw
        else:
            try:
                value = bytes(raw).decode("utf-8")
            except UnicodeDecodeError as e:
                raise CredentialResolutionError(
                    f"Key {ref.key!r} of secret {namespace}/{ref.name} is not valid UTF-8",
                    context=ctx,
                    field_name=field_name,
                    secret_name=ref.name,
                    secret_key=ref.key,
                ) from e

        logger.debug(
            "Resolved credential from secret reference",
            extra={
                "field_name": field_name,
                "source": "secret_ref",
                "namespace": namespace,
                "secret_name": ref.name,
                "correlation_id": str(ctx.correlation_id),
            },
        )
        return value

    def resolve_provider_credentials(
        self,
        config: ModelPasswordSafeProviderConfig,
        default_namespace: str,
        correlation_id: UUID | None = None,
    ) -> ModelResolvedCredentials:
        """Resolve all credential fields of a provider block.

        Client ID and secret are required; certificate and key are optional.
        The first failure aborts resolution.

        Args:
            config: Provider configuration
            default_namespace: Namespace for references without one
            correlation_id: Correlation ID for error context

        Returns:
            ModelResolvedCredentials ready for the authenticator
        """
        client_id = self.resolve(
            config.client_id,
            default_namespace,
            "client_id",
            correlation_id=correlation_id,
        )
        client_secret = self.resolve(
            config.client_secret,
            default_namespace,
            "client_secret",
            correlation_id=correlation_id,
        )
        certificate = self.resolve(
            config.certificate,
            default_namespace,
            "certificate",
            required=False,
            correlation_id=correlation_id,
        )
        certificate_key = self.resolve(
            config.certificate_key,
            default_namespace,
            "certificate_key",
            required=False,
            correlation_id=correlation_id,
        )

        return ModelResolvedCredentials(
            api_url=config.api_url,
            client_id=client_id,
            client_secret=SecretStr(client_secret),
            certificate=SecretStr(certificate),
            certificate_key=SecretStr(certificate_key),
            retrieval_type=config.retrieval_type,
            client_timeout_seconds=config.client_timeout_seconds,
            verify_ca=config.verify_ca,
            separator=config.separator,
            max_file_secret_size_bytes=config.max_file_secret_size_bytes,
            retry=config.retry,
        )


__all__: list[str] = ["CredentialResolver", "validate_descriptor"]
