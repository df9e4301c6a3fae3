# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Manifest loading for secret stores and key-value store secrets.

Reads multi-document YAML files holding ``SecretStore`` / ``ClusterSecretStore``
resources and Kubernetes ``Secret`` resources.

Security:
    - Uses yaml.safe_load_all() to prevent arbitrary code execution
    - Files larger than MAX_MANIFEST_SIZE_BYTES are rejected before reading
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from passwordsafe_provider.enums import EnumInfraTransportType
from passwordsafe_provider.errors import (
    ModelInfraErrorContext,
    ProtocolConfigurationError,
)
from passwordsafe_provider.models import ModelSecretStore
from passwordsafe_provider.runtime.key_value_store_inmemory import (
    InMemoryKeyValueStore,
)

logger = logging.getLogger(__name__)

MAX_MANIFEST_SIZE_BYTES = 1024 * 1024

STORE_KINDS: frozenset[str] = frozenset({"SecretStore", "ClusterSecretStore"})


def _context(path: Path | str, operation: str) -> ModelInfraErrorContext:
    return ModelInfraErrorContext.with_correlation(
        transport_type=EnumInfraTransportType.RUNTIME,
        operation=operation,
        target_name=str(path),
    )


def load_manifests(manifest_path: str | Path) -> list[dict[str, object]]:
    """Parse every YAML document in a file.

    Empty documents are dropped.

    Raises:
        ProtocolConfigurationError: File missing, too large, invalid YAML,
            or a document that is not a mapping
    """
    path = Path(manifest_path)
    if not path.is_file():
        raise ProtocolConfigurationError(
            f"Manifest file not found: {manifest_path}",
            context=_context(path, "load_manifests"),
        )

    file_size = path.stat().st_size
    if file_size > MAX_MANIFEST_SIZE_BYTES:
        raise ProtocolConfigurationError(
            f"Manifest file too large: {file_size} bytes (max {MAX_MANIFEST_SIZE_BYTES})",
            context=_context(path, "load_manifests"),
        )

    try:
        with path.open(encoding="utf-8") as f:
            documents = [doc for doc in yaml.safe_load_all(f) if doc is not None]
    except yaml.YAMLError as e:
        raise ProtocolConfigurationError(
            f"Invalid YAML in manifest: {e}",
            context=_context(path, "load_manifests"),
        ) from e

    for index, doc in enumerate(documents):
        if not isinstance(doc, dict):
            raise ProtocolConfigurationError(
                f"Manifest document {index} must be a mapping, got {type(doc).__name__}",
                context=_context(path, "load_manifests"),
            )

    logger.debug(
        "Loaded manifest file",
        extra={"manifest_path": str(path), "document_count": len(documents)},
    )
    return documents


def load_secret_store(manifest_path: str | Path) -> ModelSecretStore:
    """Load the first secret store resource of a manifest file.

    Raises:
        ProtocolConfigurationError: No store document, or the store does not
            match the store schema
    """
    for doc in load_manifests(manifest_path):
        if doc.get("kind") not in STORE_KINDS:
            continue
        try:
            return ModelSecretStore.from_manifest(doc)
        except ValidationError as e:
            raise ProtocolConfigurationError(
                f"Invalid secret store manifest: {e.error_count()} validation error(s)",
                context=_context(manifest_path, "load_secret_store"),
                validation_errors=[
                    ".".join(str(p) for p in err["loc"]) for err in e.errors()
                ],
            ) from e

    raise ProtocolConfigurationError(
        f"No SecretStore or ClusterSecretStore found in {manifest_path}",
        context=_context(manifest_path, "load_secret_store"),
    )


def load_key_value_store(
    *manifest_paths: str | Path,
    default_namespace: str = "default",
) -> InMemoryKeyValueStore:
    """Build an in-memory key-value store from ``Secret`` manifests in the given files."""
    documents: list[dict[str, object]] = []
    for manifest_path in manifest_paths:
        documents.extend(load_manifests(manifest_path))
    return InMemoryKeyValueStore.from_manifests(
        documents,
        default_namespace=default_namespace,
    )


__all__: list[str] = [
    "MAX_MANIFEST_SIZE_BYTES",
    "STORE_KINDS",
    "load_key_value_store",
    "load_manifests",
    "load_secret_store",
]
