# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Password Safe secret store provider and secrets client.

PasswordSafeProvider is what gets registered with the ProviderRegistry. For
each admitted store it resolves the provider credentials once and returns a
PasswordSafeSecretsClient. The client serves read requests: every
get_secret() call builds its own HTTP client, authenticates, fetches the
value, signs out and closes the transport. Sessions are never reused.

Lifecycle:
    CONSTRUCTED --close()--> CLOSED

Capabilities:
    Read-only. get_secret_map, get_all_secrets, push_secret, delete_secret
    and secret_exists raise OperationNotImplementedError without any I/O.

Example:
    ```python
    provider = PasswordSafeProvider()
    provider.validate_store(store)
    client = provider.new_client(store, kv_store, store.namespace)
    try:
        value = await client.get_secret("prod/db-password", timeout_seconds=30)
    finally:
        await client.close()
    ```
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable
from uuid import UUID, uuid4

import httpx

from passwordsafe_provider.enums import (
    EnumClientState,
    EnumInfraTransportType,
    EnumProviderErrorCode,
    EnumStoreCapability,
    EnumValidationResult,
)
from passwordsafe_provider.errors import (
    InfraTimeoutError,
    ModelInfraErrorContext,
    OperationNotImplementedError,
    PasswordSafeProviderError,
)
from passwordsafe_provider.handlers import (
    PasswordSafeAuthenticator,
    RetrievalDispatcher,
    build_http_client,
)
from passwordsafe_provider.models import (
    ModelRemoteRef,
    ModelResolvedCredentials,
    ModelSecretStore,
)
from passwordsafe_provider.protocols import ProtocolKeyValueStore
from passwordsafe_provider.runtime.credential_resolver import CredentialResolver
from passwordsafe_provider.runtime.store_validator import validate_store

logger = logging.getLogger(__name__)

HttpClientFactory = Callable[[ModelResolvedCredentials], httpx.AsyncClient]


class PasswordSafeSecretsClient:
    """Read-only secrets client bound to one store's resolved credentials.

    Holds no mutable state besides its lifecycle state; concurrent
    get_secret() calls are independent.
    """

    def __init__(
        self,
        credentials: ModelResolvedCredentials,
        *,
        store_name: str = "",
        http_client_factory: HttpClientFactory = build_http_client,
        authenticator: PasswordSafeAuthenticator | None = None,
        dispatcher: RetrievalDispatcher | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._credentials = credentials
        self._store_name = store_name
        self._http_client_factory = http_client_factory
        self._authenticator = authenticator or PasswordSafeAuthenticator(credentials)
        self._dispatcher = dispatcher or RetrievalDispatcher.for_api_url(
            credentials.base_url
        )
        self._clock = clock
        self._state = EnumClientState.CONSTRUCTED

    @property
    def state(self) -> EnumClientState:
        return self._state

    @property
    def credentials(self) -> ModelResolvedCredentials:
        return self._credentials

    def _context(self, operation: str, correlation_id: UUID) -> ModelInfraErrorContext:
        return ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.PASSWORD_SAFE,
            operation=operation,
            target_name=self._store_name or self._credentials.api_url,
            correlation_id=correlation_id,
        )

    async def get_secret(
        self,
        ref: ModelRemoteRef | str,
        *,
        timeout_seconds: float | None = None,
    ) -> bytes:
        """Fetch one secret value.

        The key and retrieval type are validated before anything is sent.
        With ``timeout_seconds`` the whole call (including authentication
        retries) is bounded; the authenticator stops retrying when the next
        delay would cross the deadline.

        Args:
            ref: Remote reference or bare two-segment key
            timeout_seconds: Optional bound on the whole call

        Returns:
            The secret value as raw bytes

        Raises:
            PasswordSafeProviderError: Client closed
            MalformedKeyError: Key does not have exactly two segments
            UnsupportedRetrievalTypeError: Configured retrieval type unknown
            AuthenticationExhaustedError: Authentication kept failing
            InfraTimeoutError: ``timeout_seconds`` elapsed
            RetrievalError: Nothing found, or file secret too large
        """
        correlation_id = uuid4()
        if self._state is not EnumClientState.CONSTRUCTED:
            raise PasswordSafeProviderError(
                "Secrets client is closed",
                error_code=EnumProviderErrorCode.OPERATION_FAILED,
                context=self._context("get_secret", correlation_id),
                client_state=self._state.value,
            )

        key = ref.key if isinstance(ref, ModelRemoteRef) else ref
        self._dispatcher.plan(
            key,
            self._credentials.retrieval_type,
            correlation_id,
        )

        if timeout_seconds is None:
            return await self._retrieve(key, correlation_id, deadline=None)

        deadline = self._clock() + timeout_seconds
        try:
            async with asyncio.timeout(timeout_seconds):
                return await self._retrieve(key, correlation_id, deadline=deadline)
        except TimeoutError as e:
            raise InfraTimeoutError(
                f"Secret retrieval exceeded {timeout_seconds}s",
                context=self._context("get_secret", correlation_id),
                secret_key=key,
                timeout_seconds=timeout_seconds,
            ) from e

    async def _retrieve(
        self,
        key: str,
        correlation_id: UUID,
        *,
        deadline: float | None,
    ) -> bytes:
        credentials = self._credentials
        async with self._http_client_factory(credentials) as client:
            session = await self._authenticator.authenticate(
                client, correlation_id, deadline=deadline
            )
            try:
                value = await self._dispatcher.fetch(
                    client,
                    session,
                    key,
                    credentials.retrieval_type,
                    credentials.max_file_secret_size_bytes,
                    credentials.separator,
                    correlation_id,
                )
            finally:
                await self._authenticator.sign_out(client, session, correlation_id)

        logger.info(
            "Retrieved secret from Password Safe",
            extra={
                "store_name": self._store_name,
                "secret_key": key,
                "retrieval_type": credentials.retrieval_type,
                "size_bytes": len(value),
                "correlation_id": str(correlation_id),
            },
        )
        return value

    def _not_implemented(self, operation: str) -> OperationNotImplementedError:
        return OperationNotImplementedError(
            f"{operation} is not supported by the read-only Password Safe provider",
            context=self._context(operation, uuid4()),
            operation_name=operation,
        )

    async def get_secret_map(self, ref: ModelRemoteRef | str) -> dict[str, bytes]:
        raise self._not_implemented("get_secret_map")

    async def get_all_secrets(self, find: object) -> dict[str, bytes]:
        raise self._not_implemented("get_all_secrets")

    async def push_secret(self, secret: object, data: object) -> None:
        raise self._not_implemented("push_secret")

    async def delete_secret(self, ref: object) -> None:
        raise self._not_implemented("delete_secret")

    async def secret_exists(self, ref: object) -> bool:
        raise self._not_implemented("secret_exists")

    def validate(self) -> EnumValidationResult:
        """Always UNKNOWN: checking connectivity takes a full handshake."""
        return EnumValidationResult.UNKNOWN

    async def close(self) -> None:
        if self._state is EnumClientState.CLOSED:
            return
        self._state = EnumClientState.CLOSED
        logger.debug("Closed secrets client", extra={"store_name": self._store_name})


class PasswordSafeProvider:
    """Secret store provider for BeyondTrust Password Safe.

    The keyword arguments are passed to every client and authenticator this
    provider builds; tests use them to swap the transport and the clock.
    """

    def __init__(
        self,
        *,
        http_client_factory: HttpClientFactory = build_http_client,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        rng: random.Random | None = None,
    ) -> None:
        self._http_client_factory = http_client_factory
        self._sleep = sleep
        self._clock = clock
        self._rng = rng

    def capabilities(self) -> EnumStoreCapability:
        return EnumStoreCapability.READ_ONLY

    def validate_store(self, store: ModelSecretStore | None) -> list[str]:
        """Check the store's shape and endpoint; see store_validator.validate_store."""
        return validate_store(store)

    def new_client(
        self,
        store: ModelSecretStore,
        kv_store: ProtocolKeyValueStore,
        namespace: str,
    ) -> PasswordSafeSecretsClient:
        """Resolve credentials and build a client.

        Args:
            store: Store to build a client for
            kv_store: Key-value store credential references point into
            namespace: Default namespace for references without one

        Returns:
            A client in CONSTRUCTED state

        Raises:
            ProtocolConfigurationError: Store shape or endpoint invalid
            CredentialResolutionError: Any credential could not be resolved
        """
        correlation_id = uuid4()
        validate_store(store, correlation_id=correlation_id)
        config = store.provider_config
        assert config is not None  # validate_store guards this

        resolver = CredentialResolver(kv_store)
        credentials = resolver.resolve_provider_credentials(
            config,
            default_namespace=namespace,
            correlation_id=correlation_id,
        )
        authenticator = PasswordSafeAuthenticator(
            credentials,
            sleep=self._sleep,
            clock=self._clock,
            rng=self._rng,
        )
        logger.info(
            "Built Password Safe secrets client",
            extra={
                "store_name": store.name,
                "namespace": namespace,
                "retrieval_type": credentials.retrieval_type,
                "correlation_id": str(correlation_id),
            },
        )
        return PasswordSafeSecretsClient(
            credentials,
            store_name=f"{store.namespace}/{store.name}",
            http_client_factory=self._http_client_factory,
            authenticator=authenticator,
            clock=self._clock,
        )


__all__: list[str] = [
    "HttpClientFactory",
    "PasswordSafeProvider",
    "PasswordSafeSecretsClient",
]
