# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secret Store Models.

A secret store is the orchestrator-side resource that selects a provider and
carries its configuration. Every level is optional so that the store
validator can report exactly which one is missing.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from passwordsafe_provider.models.model_provider_config import (
    ModelPasswordSafeProviderConfig,
)


class ModelSecretStoreProvider(BaseModel):
    """Provider block of a store spec.

    Blocks for other providers are ignored; only ``passwordsafe`` is read.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    passwordsafe: ModelPasswordSafeProviderConfig | None = Field(
        default=None,
        description="Password Safe provider configuration",
    )


class ModelSecretStoreSpec(BaseModel):
    """Spec of a secret store."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    provider: ModelSecretStoreProvider | None = Field(
        default=None,
        description="Provider selection and configuration",
    )


class ModelSecretStore(BaseModel):
    """A namespaced secret store resource.

    Attributes:
        name: Store name
        namespace: Namespace the store lives in; default namespace for
            credential references without an explicit namespace
        kind: ``SecretStore`` or ``ClusterSecretStore``
        spec: Store spec, None when the manifest has none
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="", description="Store name")
    namespace: str = Field(default="default", description="Store namespace")
    kind: str = Field(default="SecretStore", description="Store resource kind")
    spec: ModelSecretStoreSpec | None = Field(default=None, description="Store spec")

    @property
    def provider_config(self) -> ModelPasswordSafeProviderConfig | None:
        """Return the Password Safe block, or None when any level is missing."""
        if self.spec is None or self.spec.provider is None:
            return None
        return self.spec.provider.passwordsafe

    @classmethod
    def from_manifest(cls, manifest: Mapping[str, object]) -> ModelSecretStore:
        """Build a store from a Kubernetes-style manifest mapping.

        Args:
            manifest: Parsed manifest with ``kind``, ``metadata`` and ``spec``

        Returns:
            ModelSecretStore for the manifest
        """
        metadata = manifest.get("metadata") or {}
        if not isinstance(metadata, Mapping):
            metadata = {}
        return cls.model_validate(
            {
                "name": metadata.get("name", ""),
                "namespace": metadata.get("namespace") or "default",
                "kind": manifest.get("kind") or "SecretStore",
                "spec": manifest.get("spec"),
            }
        )


__all__: list[str] = [
    "ModelSecretStore",
    "ModelSecretStoreProvider",
    "ModelSecretStoreSpec",
]
