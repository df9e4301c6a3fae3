# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Password Safe authentication handshake with bounded exponential backoff.

A handshake is two requests:

1. ``POST /Auth/connect/token`` (OAuth client credentials grant) returns an
   access token.
2. ``POST /Auth/SignAppIn`` with the bearer token opens the vault session.

The handshake runs once per retrieval call. Failures are retried under
ExponentialBackoffPolicy until the elapsed-time budget (15 minutes by
default) or the caller's deadline would be exceeded, at which point
AuthenticationExhaustedError is raised with the last failure attached.

Retry Classification:
    By default every failure is retried, including 4xx credential
    rejections. With ``retry_on_client_error=False`` a 4xx response ends the
    loop immediately with InfraAuthenticationError.

Thread Safety:
    An authenticator holds only immutable credentials and injected
    callables; concurrent authenticate() calls each get their own backoff
    policy.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from uuid import UUID, uuid4

import httpx

from passwordsafe_provider.errors import (
    AuthenticationExhaustedError,
    InfraAuthenticationError,
    PasswordSafeProviderError,
)
from passwordsafe_provider.mixins import MixinPasswordSafeHttp
from passwordsafe_provider.models import (
    ModelAuthSession,
    ModelBackoffConfig,
    ModelResolvedCredentials,
)
from passwordsafe_provider.runtime.backoff_policy import ExponentialBackoffPolicy

logger = logging.getLogger(__name__)

TOKEN_PATH: str = "/Auth/connect/token"
SIGN_IN_PATH: str = "/Auth/SignAppIn"
SIGN_OUT_PATH: str = "/Auth/Signout"
GRANT_TYPE_CLIENT_CREDENTIALS: str = "client_credentials"


def _is_client_rejection(error: PasswordSafeProviderError) -> bool:
    status = error.context.get("status_code")
    return isinstance(status, int) and 400 <= status < 500


class PasswordSafeAuthenticator(MixinPasswordSafeHttp):
    """Performs the token and sign-in handshake against one vault.

    Attributes:
        backoff_config: Backoff schedule in effect

    Example:
        >>> authenticator = PasswordSafeAuthenticator(credentials)
        >>> async with build_http_client(credentials) as client:
        ...     session = await authenticator.authenticate(client)
        ...     ...
        ...     await authenticator.sign_out(client, session)
    """

    def __init__(
        self,
        credentials: ModelResolvedCredentials,
        backoff_config: ModelBackoffConfig | None = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        rng: random.Random | None = None,
        now: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        """Initialize the authenticator.

        Args:
            credentials: Resolved client credentials
            backoff_config: Backoff schedule (defaults to ``credentials.retry``)
            sleep: Awaitable sleep used between attempts
            clock: Monotonic clock used for elapsed time and deadlines
            rng: Random source for jitter
            now: Wall clock used to compute token expiry
        """
        self._init_password_safe_http(credentials.base_url)
        self._credentials = credentials
        self.backoff_config = backoff_config or credentials.retry
        self._sleep = sleep
        self._clock = clock
        self._rng = rng
        self._now = now

    async def authenticate(
        self,
        client: httpx.AsyncClient,
        correlation_id: UUID | None = None,
        *,
        deadline: float | None = None,
    ) -> ModelAuthSession:
        """Run the handshake, retrying with backoff until it succeeds.

        Args:
            client: HTTP client for the vault
            correlation_id: Correlation ID for logs and errors
            deadline: Optional ``clock()`` value after which no further
                attempt is started

        Returns:
            ModelAuthSession for the signed-in application

        Raises:
            AuthenticationExhaustedError: Retry budget or deadline exhausted
            InfraAuthenticationError: 4xx rejection with
                ``retry_on_client_error`` disabled
        """
        correlation_id = correlation_id or uuid4()
        policy = ExponentialBackoffPolicy(
            self.backoff_config,
            clock=self._clock,
            rng=self._rng,
        )
        policy.reset()
        attempt = 0

        while True:
            attempt += 1
            try:
                session = await self._handshake(client, correlation_id)
            except PasswordSafeProviderError as e:
                last_error = e
                if not self.backoff_config.retry_on_client_error and _is_client_rejection(e):
                    self._raise_client_rejection(e, attempt, correlation_id)
            else:
                logger.info(
                    "Authenticated to Password Safe",
                    extra={
                        "target": self._ps_target_name,
                        "attempts": attempt,
                        "correlation_id": str(correlation_id),
                    },
                )
                return session

            delay = policy.next_backoff()
            stop_reason: str | None = None
            if delay is None:
                stop_reason = "retry budget exhausted"
            elif deadline is not None and self._clock() + delay > deadline:
                stop_reason = "deadline reached"

            if stop_reason is not None:
                elapsed = policy.elapsed_seconds
                logger.error(
                    "Password Safe authentication failed",
                    extra={
                        "target": self._ps_target_name,
                        "attempts": attempt,
                        "elapsed_seconds": elapsed,
                        "stop_reason": stop_reason,
                        "error_type": type(last_error).__name__,
                        "correlation_id": str(correlation_id),
                    },
                )
                raise AuthenticationExhaustedError(
                    f"Authentication to {self._ps_target_name} failed after "
                    f"{attempt} attempt(s): {stop_reason}",
                    context=self._build_error_context("authenticate", correlation_id),
                    last_error=last_error,
                    attempts=attempt,
                    elapsed_seconds=round(elapsed, 3),
                ) from last_error

            logger.warning(
                "Password Safe authentication attempt failed, retrying",
                extra={
                    "target": self._ps_target_name,
                    "attempt": attempt,
                    "delay_seconds": delay,
                    "error_type": type(last_error).__name__,
                    "error_code": last_error.error_code.value,
                    "correlation_id": str(correlation_id),
                },
            )
            await self._sleep(delay)

    def _raise_client_rejection(
        self,
        error: PasswordSafeProviderError,
        attempt: int,
        correlation_id: UUID,
    ) -> None:
        if isinstance(error, InfraAuthenticationError):
            raise error
        raise InfraAuthenticationError(
            f"Credentials rejected by {self._ps_target_name}",
            context=self._build_error_context("authenticate", correlation_id),
            status_code=error.context.get("status_code"),
            attempts=attempt,
        ) from error

    async def _handshake(
        self,
        client: httpx.AsyncClient,
        correlation_id: UUID,
    ) -> ModelAuthSession:
        response = await self._send_request(
            client,
            "POST",
            TOKEN_PATH,
            operation="request_token",
            correlation_id=correlation_id,
            data={
                "client_id": self._credentials.client_id,
                "client_secret": self._credentials.client_secret.get_secret_value(),
                "grant_type": GRANT_TYPE_CLIENT_CREDENTIALS,
            },
        )
        payload = self._parse_json(response, "request_token", correlation_id)
        if not isinstance(payload, dict):
            raise InfraAuthenticationError(
                "Token response is not a JSON object",
                context=self._build_error_context("request_token", correlation_id),
            )
        try:
            session = ModelAuthSession.from_token_response(payload, self._now())
        except ValueError as e:
            raise InfraAuthenticationError(
                "Token response has no usable access token or expiry",
                context=self._build_error_context("request_token", correlation_id),
            ) from e

        await self._send_request(
            client,
            "POST",
            SIGN_IN_PATH,
            operation="sign_app_in",
            correlation_id=correlation_id,
            session=session,
        )
        return session

    async def sign_out(
        self,
        client: httpx.AsyncClient,
        session: ModelAuthSession,
        correlation_id: UUID | None = None,
    ) -> bool:
        """End the vault session.

        Failures are logged, not raised.

        Returns:
            True if the vault acknowledged the sign-out
        """
        correlation_id = correlation_id or uuid4()
        try:
            await self._send_request(
                client,
                "POST",
                SIGN_OUT_PATH,
                operation="sign_out",
                correlation_id=correlation_id,
                session=session,
            )
        except PasswordSafeProviderError as e:
            logger.warning(
                "Password Safe sign-out failed",
                extra={
                    "target": self._ps_target_name,
                    "error_type": type(e).__name__,
                    "error_code": e.error_code.value,
                    "correlation_id": str(correlation_id),
                },
            )
            return False
        return True


__all__: list[str] = [
    "GRANT_TYPE_CLIENT_CREDENTIALS",
    "PasswordSafeAuthenticator",
    "SIGN_IN_PATH",
    "SIGN_OUT_PATH",
    "TOKEN_PATH",
]
