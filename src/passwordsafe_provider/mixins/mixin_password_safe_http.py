# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Password Safe HTTP Mixin for vault-calling components.

Shared request plumbing for the authenticator and the retrieval strategies:
URL building against the configured API base, bearer headers, and mapping of
transport failures and HTTP status codes to typed provider errors.

The mixin performs exactly one request per call. Retrying is the caller's
decision (only the authenticator retries). ``_stream_request`` yields the
response unread so callers can bound how much of a large body they consume.

Error Mapping:
    - httpx.ConnectError       -> InfraConnectionError
    - httpx.TimeoutException   -> InfraTimeoutError
    - other httpx.HTTPError    -> InfraConnectionError
    - 401/403                  -> InfraAuthenticationError
    - 404                      -> SecretNotFoundError
    - other 4xx                -> InfraRequestRejectedError
    - 5xx and anything else    -> InfraUnavailableError

Security:
    Response bodies attached to errors are truncated and never come from a
    successful response, so retrieved secret values cannot leak into errors.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from json import JSONDecodeError
from typing import TYPE_CHECKING
from urllib.parse import urlsplit
from uuid import UUID

import httpx

from passwordsafe_provider.enums import EnumInfraTransportType
from passwordsafe_provider.errors import (
    InfraAuthenticationError,
    InfraConnectionError,
    InfraRequestRejectedError,
    InfraTimeoutError,
    InfraUnavailableError,
    ModelInfraErrorContext,
    PasswordSafeProviderError,
    SecretNotFoundError,
)

if TYPE_CHECKING:
    from passwordsafe_provider.models import ModelAuthSession

logger = logging.getLogger(__name__)

MAX_ERROR_BODY_CHARS: int = 200
MAX_ERROR_BODY_BYTES: int = 4096


def sanitize_response_body(text: str) -> str:
    """Collapse whitespace and truncate an error response body."""
    collapsed = " ".join(text.split())
    if len(collapsed) > MAX_ERROR_BODY_CHARS:
        return collapsed[:MAX_ERROR_BODY_CHARS] + "..."
    return collapsed


async def _read_error_body(response: httpx.Response) -> str:
    """Read at most MAX_ERROR_BODY_BYTES of a streamed error response."""
    buffer = bytearray()
    async for chunk in response.aiter_bytes():
        buffer.extend(chunk)
        if len(buffer) >= MAX_ERROR_BODY_BYTES:
            break
    return bytes(buffer[:MAX_ERROR_BODY_BYTES]).decode("utf-8", errors="replace")


class MixinPasswordSafeHttp:
    """Request helpers for the Password Safe REST API.

    Call ``_init_password_safe_http`` from ``__init__`` before using the other
    helpers.

    Example:
        ```python
        class SecretsSafeStrategy(MixinPasswordSafeHttp):
            def __init__(self, api_url: str) -> None:
                self._init_password_safe_http(api_url)

            async def fetch(self, client, session, path, ...):
                response = await self._send_request(
                    client, "GET", "/secrets-safe/secrets",
                    operation="find_secret", correlation_id=cid,
                    session=session, params={"title": path.second},
                )
        ```
    """

    _ps_base_url: str
    _ps_target_name: str

    def _init_password_safe_http(self, api_url: str) -> None:
        self._ps_base_url = api_url.rstrip("/")
        self._ps_target_name = urlsplit(api_url).hostname or api_url

    def _build_url(self, path: str) -> str:
        return f"{self._ps_base_url}/{path.lstrip('/')}"

    def _build_error_context(
        self,
        operation: str,
        correlation_id: UUID,
    ) -> ModelInfraErrorContext:
        return ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.PASSWORD_SAFE,
            operation=operation,
            target_name=self._ps_target_name,
            correlation_id=correlation_id,
        )

    async def _send_request(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        *,
        operation: str,
        correlation_id: UUID,
        session: ModelAuthSession | None = None,
        params: dict[str, str] | None = None,
        data: dict[str, str] | None = None,
        json: dict[str, object] | None = None,
    ) -> httpx.Response:
        """Send one request and return the 2xx response.

        Args:
            client: HTTP client to send with
            method: HTTP method
            path: API path relative to the configured base URL
            operation: Operation name for logs and error context
            correlation_id: Correlation ID for logs and error context
            session: Adds the bearer header when given
            params: Query parameters
            data: Form body
            json: JSON body

        Returns:
            The successful response

        Raises:
            PasswordSafeProviderError: Typed error per the mapping above
        """
        headers = session.authorization_header() if session is not None else None
        url = self._build_url(path)
        try:
            response = await client.request(
                method,
                url,
                headers=headers,
                params=params,
                data=data,
                json=json,
            )
        except httpx.HTTPError as e:
            raise self._map_transport_error(e, operation, path, correlation_id) from e

        self._log_response(method, path, operation, response, correlation_id)
        if not response.is_success:
            raise self._map_http_status_to_error(
                response.status_code, response.text, operation, path, correlation_id
            )
        return response

    @asynccontextmanager
    async def _stream_request(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        *,
        operation: str,
        correlation_id: UUID,
        session: ModelAuthSession | None = None,
    ) -> AsyncIterator[httpx.Response]:
        """Open a streaming request and yield the 2xx response unread.

        The body is consumed by the caller with ``response.aiter_bytes()``.
        Transport failures while opening or reading map to the same typed
        errors as ``_send_request``. Error bodies are read only up to
        ``MAX_ERROR_BODY_BYTES``.

        Raises:
            PasswordSafeProviderError: Typed error per the mapping above
        """
        headers = session.authorization_header() if session is not None else None
        url = self._build_url(path)
        try:
            async with client.stream(method, url, headers=headers) as response:
                self._log_response(method, path, operation, response, correlation_id)
                if not response.is_success:
                    body = await _read_error_body(response)
                    raise self._map_http_status_to_error(
                        response.status_code, body, operation, path, correlation_id
                    )
                yield response
        except httpx.HTTPError as e:
            raise self._map_transport_error(e, operation, path, correlation_id) from e

    def _log_response(
        self,
        method: str,
        path: str,
        operation: str,
        response: httpx.Response,
        correlation_id: UUID,
    ) -> None:
        logger.debug(
            "Password Safe request completed",
            extra={
                "operation": operation,
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "correlation_id": str(correlation_id),
            },
        )

    def _map_transport_error(
        self,
        error: httpx.HTTPError,
        operation: str,
        path: str,
        correlation_id: UUID,
    ) -> PasswordSafeProviderError:
        """Map an httpx transport failure to a typed error (returned, not raised)."""
        ctx = self._build_error_context(operation, correlation_id)
        if isinstance(error, httpx.ConnectError):
            return InfraConnectionError(
                f"Connection to {self._ps_target_name} failed: {type(error).__name__}",
                context=ctx,
                path=path,
            )
        if isinstance(error, httpx.TimeoutException):
            return InfraTimeoutError(
                f"Request to {self._ps_target_name} timed out",
                context=ctx,
                path=path,
            )
        return InfraConnectionError(
            f"HTTP transport error talking to {self._ps_target_name}: "
            f"{type(error).__name__}",
            context=ctx,
            path=path,
        )

    def _map_http_status_to_error(
        self,
        status: int,
        body: str,
        operation: str,
        path: str,
        correlation_id: UUID,
    ) -> PasswordSafeProviderError:
        """Map a non-2xx status to a typed error (returned, not raised)."""
        ctx = self._build_error_context(operation, correlation_id)
        body_snippet = sanitize_response_body(body) if body else ""

        if status in (401, 403):
            return InfraAuthenticationError(
                f"Authentication failed ({status}) from {self._ps_target_name}",
                context=ctx,
                status_code=status,
                path=path,
                response_body=body_snippet,
            )
        if status == 404:
            return SecretNotFoundError(
                f"Not found (404) at {self._ps_target_name}",
                context=ctx,
                status_code=status,
                path=path,
            )
        if 400 <= status < 500:
            return InfraRequestRejectedError(
                f"Request rejected ({status}) by {self._ps_target_name}",
                context=ctx,
                status_code=status,
                path=path,
                response_body=body_snippet,
            )
        if status >= 500:
            return InfraUnavailableError(
                f"Server error ({status}) from {self._ps_target_name}",
                context=ctx,
                status_code=status,
                path=path,
                response_body=body_snippet,
            )
        return InfraUnavailableError(
            f"Unexpected HTTP {status} from {self._ps_target_name}",
            context=ctx,
            status_code=status,
            path=path,
        )

    def _parse_json(
        self,
        response: httpx.Response,
        operation: str,
        correlation_id: UUID,
    ) -> object:
        """Decode a JSON body, raising InfraUnavailableError when it is not JSON."""
        try:
            return response.json()
        except (JSONDecodeError, ValueError) as e:
            raise InfraUnavailableError(
                f"Invalid JSON in response from {self._ps_target_name}",
                context=self._build_error_context(operation, correlation_id),
                status_code=response.status_code,
            ) from e


__all__: list[str] = [
    "MAX_ERROR_BODY_BYTES",
    "MAX_ERROR_BODY_CHARS",
    "MixinPasswordSafeHttp",
    "sanitize_response_body",
]
