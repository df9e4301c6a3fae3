# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Password Safe Provider Configuration Model.

Mirrors the ``passwordsafe`` block of a secret store manifest. Field aliases
keep the manifest spelling (``apiurl``, ``clientid``, ...); tuning fields use
camelCase aliases.

Security Note:
    Credentials are descriptors, not values. Literal values in manifests
    are supported but references into the key-value store are preferred.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from passwordsafe_provider.models.model_backoff_config import ModelBackoffConfig
from passwordsafe_provider.models.model_secret_value_descriptor import (
    ModelSecretValueDescriptor,
)

DEFAULT_CLIENT_TIMEOUT_SECONDS: float = 5.0
DEFAULT_MAX_FILE_SECRET_SIZE_BYTES: int = 5_000_000
DEFAULT_SEPARATOR: str = "/"


class ModelPasswordSafeProviderConfig(BaseModel):
    """Configuration for one Password Safe backed secret store.

    ``api_url`` is checked by the store validator, not here, so an invalid
    URL is reported as ``InvalidHostURLError``. ``retrieval_type`` is kept
    as a plain string for the same reason: unknown values are rejected by
    the retrieval dispatcher.

    Example:
        >>> config = ModelPasswordSafeProviderConfig.model_validate({
        ...     "apiurl": "https://vault.example.com/BeyondTrust/api/public/v3",
        ...     "clientid": {"value": "abc"},
        ...     "clientsecret": {"secretRef": {"name": "creds", "key": "secret"}},
        ...     "retrievaltype": "SECRET",
        ... })
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    api_url: str = Field(
        default="",
        alias="apiurl",
        description="Absolute base URL of the Password Safe API",
    )
    client_id: ModelSecretValueDescriptor = Field(
        default_factory=ModelSecretValueDescriptor,
        alias="clientid",
        description="OAuth client ID (value or reference)",
    )
    client_secret: ModelSecretValueDescriptor = Field(
        default_factory=ModelSecretValueDescriptor,
        alias="clientsecret",
        description="OAuth client secret (value or reference)",
    )
    certificate: ModelSecretValueDescriptor | None = Field(
        default=None,
        description="PEM client certificate for mutual TLS (value or reference)",
    )
    certificate_key: ModelSecretValueDescriptor | None = Field(
        default=None,
        alias="certificatekey",
        description="PEM private key for the client certificate (value or reference)",
    )
    retrieval_type: str = Field(
        default="",
        alias="retrievaltype",
        description="SECRET or MANAGED_ACCOUNT",
    )
    client_timeout_seconds: float = Field(
        default=DEFAULT_CLIENT_TIMEOUT_SECONDS,
        gt=0.0,
        le=300.0,
        description="Per-request HTTP timeout in seconds",
    )
    verify_ca: bool = Field(
        default=True,
        alias="verifyCA",
        description="Whether to verify the vault's TLS certificate",
    )
    separator: str = Field(
        default=DEFAULT_SEPARATOR,
        min_length=1,
        description=(
            "Folder path separator sent to the Secrets Safe API; "
            "keys are always written folder/title"
        ),
    )
    max_file_secret_size_bytes: int = Field(
        default=DEFAULT_MAX_FILE_SECRET_SIZE_BYTES,
        gt=0,
        description="Maximum size of a file-backed secret",
    )
    retry: ModelBackoffConfig = Field(
        default_factory=ModelBackoffConfig,
        description="Backoff schedule for the authentication handshake",
    )


__all__: list[str] = [
    "DEFAULT_CLIENT_TIMEOUT_SECONDS",
    "DEFAULT_MAX_FILE_SECRET_SIZE_BYTES",
    "DEFAULT_SEPARATOR",
    "ModelPasswordSafeProviderConfig",
]
