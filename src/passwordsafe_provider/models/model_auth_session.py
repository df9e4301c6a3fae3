# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Authenticated vault session model."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class ModelAuthSession(BaseModel):
    """Access token obtained by one authentication handshake.

    Sessions are created per retrieval call and discarded afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    access_token: SecretStr = Field(description="Bearer token for API calls")
    expires_at: datetime = Field(description="When the token stops being valid")
    token_type: str = Field(default="Bearer", description="Token type")
    scope: str = Field(default="", description="Granted scope")

    @classmethod
    def from_token_response(
        cls,
        payload: Mapping[str, object],
        now: datetime,
    ) -> ModelAuthSession:
        """Build a session from a token endpoint response body.

        Args:
            payload: ``{access_token, expires_in, token_type, scope}``
            now: Time the token was issued

        Returns:
            ModelAuthSession expiring ``expires_in`` seconds after ``now``

        Raises:
            ValueError: If ``access_token`` is missing or empty, or
                ``expires_in`` is not a number of seconds that fits a datetime
        """
        token = payload.get("access_token")
        if not isinstance(token, str) or not token:
            raise ValueError("token response has no access_token")
        expires_in = payload.get("expires_in") or 0
        try:
            expires_at = now + timedelta(seconds=float(expires_in))  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError) as e:
            raise ValueError(
                f"token response has an invalid expires_in: {expires_in!r}"
            ) from e
        return cls(
            access_token=SecretStr(token),
            expires_at=expires_at,
            token_type=str(payload.get("token_type") or "Bearer"),
            scope=str(payload.get("scope") or ""),
        )

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token.get_secret_value()}"}


__all__: list[str] = ["ModelAuthSession"]
