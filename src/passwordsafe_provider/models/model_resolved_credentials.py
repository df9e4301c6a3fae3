# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Resolved credentials held by a constructed secrets client."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from passwordsafe_provider.models.model_backoff_config import ModelBackoffConfig
from passwordsafe_provider.models.model_provider_config import (
    DEFAULT_CLIENT_TIMEOUT_SECONDS,
    DEFAULT_MAX_FILE_SECRET_SIZE_BYTES,
    DEFAULT_SEPARATOR,
)


class ModelResolvedCredentials(BaseModel):
    """Concrete credentials and tuning for one store.

    Produced once per client construction and immutable afterwards. Secret
    material is wrapped in SecretStr so that repr() and logging never show it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_url: str = Field(description="Base URL of the Password Safe API")
    client_id: str = Field(description="OAuth client ID")
    client_secret: SecretStr = Field(description="OAuth client secret")
    certificate: SecretStr = Field(
        default=SecretStr(""),
        description="PEM client certificate, empty when mutual TLS is off",
    )
    certificate_key: SecretStr = Field(
        default=SecretStr(""),
        description="PEM private key for the client certificate",
    )
    retrieval_type: str = Field(description="Configured retrieval type")
    client_timeout_seconds: float = Field(default=DEFAULT_CLIENT_TIMEOUT_SECONDS)
    verify_ca: bool = Field(default=True)
    separator: str = Field(default=DEFAULT_SEPARATOR)
    max_file_secret_size_bytes: int = Field(default=DEFAULT_MAX_FILE_SECRET_SIZE_BYTES)
    retry: ModelBackoffConfig = Field(default_factory=ModelBackoffConfig)

    @property
    def base_url(self) -> str:
        """API URL without a trailing slash."""
        return self.api_url.rstrip("/")

    @property
    def has_client_certificate(self) -> bool:
        return bool(
            self.certificate.get_secret_value()
            and self.certificate_key.get_secret_value()
        )


__all__: list[str] = ["ModelResolvedCredentials"]
