# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secrets Safe retrieval strategy.

Keys have the form ``folder/title``. Text secrets return their password
field; file secrets are downloaded and size-checked.
"""

from __future__ import annotations

import logging
from uuid import UUID

import httpx
from pydantic import ValidationError

from passwordsafe_provider.errors import (
    InfraUnavailableError,
    SecretNotFoundError,
    SecretTooLargeError,
)
from passwordsafe_provider.mixins import MixinPasswordSafeHttp
from passwordsafe_provider.models import (
    ModelAuthSession,
    ModelSecretKeyPath,
    ModelSecretPayload,
)

logger = logging.getLogger(__name__)

SECRETS_PATH: str = "/secrets-safe/secrets"


class SecretsSafeStrategy(MixinPasswordSafeHttp):
    """Looks up a Secrets Safe entry by folder path and title."""

    def __init__(self, api_url: str) -> None:
        self._init_password_safe_http(api_url)

    async def fetch(
        self,
        client: httpx.AsyncClient,
        session: ModelAuthSession,
        path: ModelSecretKeyPath,
        *,
        separator: str,
        max_secret_size_bytes: int,
        correlation_id: UUID,
    ) -> bytes:
        secret_key = path.join()
        response = await self._send_request(
            client,
            "GET",
            SECRETS_PATH,
            operation="find_secret",
            correlation_id=correlation_id,
            session=session,
            params={
                "title": path.second,
                "path": path.first,
                "separator": separator,
            },
        )
        payload = self._parse_json(response, "find_secret", correlation_id)
        if not isinstance(payload, list) or not payload:
            raise SecretNotFoundError(
                f"No secret titled {path.second!r} in folder {path.first!r}",
                context=self._build_error_context("find_secret", correlation_id),
                secret_key=secret_key,
            )
        if len(payload) > 1:
            logger.warning(
                "Multiple secrets match key, using the first",
                extra={
                    "secret_key": secret_key,
                    "match_count": len(payload),
                    "correlation_id": str(correlation_id),
                },
            )

        try:
            secret = ModelSecretPayload.model_validate(payload[0])
        except ValidationError as e:
            raise InfraUnavailableError(
                "Unexpected secret payload shape",
                context=self._build_error_context("find_secret", correlation_id),
                secret_key=secret_key,
            ) from e

        if not secret.is_file:
            return secret.password.encode("utf-8")
        return await self._download_file(
            client,
            session,
            secret,
            secret_key=secret_key,
            max_secret_size_bytes=max_secret_size_bytes,
            correlation_id=correlation_id,
        )

    async def _download_file(
        self,
        client: httpx.AsyncClient,
        session: ModelAuthSession,
        secret: ModelSecretPayload,
        *,
        secret_key: str,
        max_secret_size_bytes: int,
        correlation_id: UUID,
    ) -> bytes:
        """Stream a file secret, rejecting it once it exceeds the size limit.

        A declared ``Content-Length`` over the limit is rejected before any of
        the body is read.
        """
        content = bytearray()
        async with self._stream_request(
            client,
            "GET",
            f"{SECRETS_PATH}/{secret.id}/file/download",
            operation="download_file_secret",
            correlation_id=correlation_id,
            session=session,
        ) as response:
            declared = response.headers.get("Content-Length", "")
            if declared.isdigit() and int(declared) > max_secret_size_bytes:
                raise self._too_large(
                    secret_key, int(declared), max_secret_size_bytes, correlation_id
                )
            async for chunk in response.aiter_bytes():
                content.extend(chunk)
                # Stop reading once the limit is crossed
                if len(content) > max_secret_size_bytes:
                    raise self._too_large(
                        secret_key, len(content), max_secret_size_bytes, correlation_id
                    )

        logger.debug(
            "Downloaded file secret",
            extra={
                "secret_key": secret_key,
                "size_bytes": len(content),
                "correlation_id": str(correlation_id),
            },
        )
        return bytes(content)

    def _too_large(
        self,
        secret_key: str,
        size_bytes: int,
        max_secret_size_bytes: int,
        correlation_id: UUID,
    ) -> SecretTooLargeError:
        return SecretTooLargeError(
            f"File secret exceeds the size limit: {size_bytes} bytes seen, "
            f"limit is {max_secret_size_bytes}",
            context=self._build_error_context("download_file_secret", correlation_id),
            secret_key=secret_key,
            size_bytes=size_bytes,
            max_size_bytes=max_secret_size_bytes,
        )


__all__: list[str] = ["SECRETS_PATH", "SecretsSafeStrategy"]
