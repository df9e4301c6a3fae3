# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secret Key Selector Model.

Points at one key inside one secret of the external key-value store.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelSecretKeySelector(BaseModel):
    """Reference to ``namespace/name[key]`` in the external key-value store.

    Empty ``name`` and ``key`` are accepted here so that the credential
    resolver can report which part is missing.

    Attributes:
        name: Secret name in the key-value store
        key: Key inside the secret's data mapping
        namespace: Namespace override (the store's namespace when None)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="", description="Secret name in the key-value store")
    key: str = Field(default="", description="Key inside the secret's data mapping")
    namespace: str | None = Field(
        default=None,
        description="Namespace override; the store's namespace is used when unset",
    )


__all__: list[str] = ["ModelSecretKeySelector"]
