# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Managed account retrieval strategy.

Keys have the form ``system/account``. Retrieving a managed account
credential is a short request/checkin cycle:

1. ``GET /ManagedAccounts?systemName=&accountName=`` finds the account
2. ``POST /Requests`` opens a credential request
3. ``GET /Credentials/{requestId}`` reads the credential
4. ``PUT /Requests/{requestId}/checkin`` releases the request

Check-in is attempted whenever step 2 succeeded, also when step 3 fails.
"""

from __future__ import annotations

import logging
from uuid import UUID

import httpx
from pydantic import ValidationError

from passwordsafe_provider.errors import (
    InfraUnavailableError,
    PasswordSafeProviderError,
    SecretNotFoundError,
)
from passwordsafe_provider.mixins import MixinPasswordSafeHttp
from passwordsafe_provider.models import (
    ModelAuthSession,
    ModelManagedAccount,
    ModelSecretKeyPath,
)

logger = logging.getLogger(__name__)

MANAGED_ACCOUNTS_PATH: str = "/ManagedAccounts"
REQUESTS_PATH: str = "/Requests"
CREDENTIALS_PATH: str = "/Credentials"
REQUEST_DURATION_MINUTES: int = 5
CONFLICT_OPTION_REUSE: str = "reuse"
REQUEST_REASON: str = "passwordsafe-provider secret retrieval"


class ManagedAccountStrategy(MixinPasswordSafeHttp):
    """Requests, reads and checks in a managed account credential."""

    def __init__(self, api_url: str, reason: str = REQUEST_REASON) -> None:
        self._init_password_safe_http(api_url)
        self._reason = reason

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
        account = await self._find_account(
            client, session, path, secret_key, correlation_id
        )
        request_id = await self._create_request(
            client, session, account, secret_key, correlation_id
        )
        try:
            return await self._read_credential(
                client, session, request_id, secret_key, correlation_id
            )
        finally:
            await self._check_in(client, session, request_id, correlation_id)

    async def _find_account(
        self,
        client: httpx.AsyncClient,
        session: ModelAuthSession,
        path: ModelSecretKeyPath,
        secret_key: str,
        correlation_id: UUID,
    ) -> ModelManagedAccount:
        response = await self._send_request(
            client,
            "GET",
            MANAGED_ACCOUNTS_PATH,
            operation="find_managed_account",
            correlation_id=correlation_id,
            session=session,
            params={"systemName": path.first, "accountName": path.second},
        )
        payload = self._parse_json(response, "find_managed_account", correlation_id)
        # A lookup by system and account name returns one object; older API
        # versions return a list.
        if isinstance(payload, list):
            payload = payload[0] if payload else None
        if not payload:
            raise SecretNotFoundError(
                f"No managed account {path.second!r} on system {path.first!r}",
                context=self._build_error_context(
                    "find_managed_account", correlation_id
                ),
                secret_key=secret_key,
            )
        try:
            return ModelManagedAccount.model_validate(payload)
        except ValidationError as e:
            raise InfraUnavailableError(
                "Unexpected managed account payload shape",
                context=self._build_error_context(
                    "find_managed_account", correlation_id
                ),
                secret_key=secret_key,
            ) from e

    async def _create_request(
        self,
        client: httpx.AsyncClient,
        session: ModelAuthSession,
        account: ModelManagedAccount,
        secret_key: str,
        correlation_id: UUID,
    ) -> str:
        response = await self._send_request(
            client,
            "POST",
            REQUESTS_PATH,
            operation="create_request",
            correlation_id=correlation_id,
            session=session,
            json={
                "SystemID": account.system_id,
                "AccountID": account.account_id,
                "DurationMinutes": REQUEST_DURATION_MINUTES,
                "Reason": self._reason,
                "ConflictOption": CONFLICT_OPTION_REUSE,
            },
        )
        payload = self._parse_json(response, "create_request", correlation_id)
        if isinstance(payload, bool) or not isinstance(payload, (int, str)) or payload == "":
            raise InfraUnavailableError(
                "Credential request returned no request id",
                context=self._build_error_context("create_request", correlation_id),
                secret_key=secret_key,
            )
        logger.debug(
            "Opened managed account request",
            extra={
                "secret_key": secret_key,
                "request_id": str(payload),
                "correlation_id": str(correlation_id),
            },
        )
        return str(payload)

    async def _read_credential(
        self,
        client: httpx.AsyncClient,
        session: ModelAuthSession,
        request_id: str,
        secret_key: str,
        correlation_id: UUID,
    ) -> bytes:
        response = await self._send_request(
            client,
            "GET",
            f"{CREDENTIALS_PATH}/{request_id}",
            operation="read_credential",
            correlation_id=correlation_id,
            session=session,
        )
        payload = self._parse_json(response, "read_credential", correlation_id)
        if not isinstance(payload, str):
            raise InfraUnavailableError(
                "Credential response is not a string",
                context=self._build_error_context("read_credential", correlation_id),
                secret_key=secret_key,
                request_id=request_id,
            )
        return payload.encode("utf-8")

    async def _check_in(
        self,
        client: httpx.AsyncClient,
        session: ModelAuthSession,
        request_id: str,
        correlation_id: UUID,
    ) -> None:
        try:
            await self._send_request(
                client,
                "PUT",
                f"{REQUESTS_PATH}/{request_id}/checkin",
                operation="check_in_request",
                correlation_id=correlation_id,
                session=session,
                json={"Reason": self._reason},
            )
        except PasswordSafeProviderError as e:
            logger.warning(
                "Managed account request check-in failed",
                extra={
                    "request_id": request_id,
                    "error_type": type(e).__name__,
                    "error_code": e.error_code.value,
                    "correlation_id": str(correlation_id),
                },
            )


__all__: list[str] = [
    "CONFLICT_OPTION_REUSE",
    "CREDENTIALS_PATH",
    "MANAGED_ACCOUNTS_PATH",
    "ManagedAccountStrategy",
    "REQUESTS_PATH",
    "REQUEST_DURATION_MINUTES",
]
