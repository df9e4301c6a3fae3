# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Value-or-reference descriptor for provider credentials."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from passwordsafe_provider.models.model_secret_key_selector import (
    ModelSecretKeySelector,
)


class ModelSecretValueDescriptor(BaseModel):
    """A credential given either literally or by reference.

    Exactly one of ``value`` (non-empty) or ``secret_ref`` must be set. The
    model does not enforce this itself; ``CredentialResolver`` does, so that
    each violation surfaces as its own error type.

    Example:
        >>> ModelSecretValueDescriptor(value="abc")
        >>> ModelSecretValueDescriptor.model_validate(
        ...     {"secretRef": {"name": "creds", "key": "id"}}
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    value: str = Field(default="", description="Literal credential value")
    secret_ref: ModelSecretKeySelector | None = Field(
        default=None,
        alias="secretRef",
        description="Reference to a key in the external key-value store",
    )

    @property
    def is_reference(self) -> bool:
        """True when the credential is read from the key-value store."""
        return self.secret_ref is not None


__all__: list[str] = ["ModelSecretValueDescriptor"]
