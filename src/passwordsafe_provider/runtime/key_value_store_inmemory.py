# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""In-memory key-value store for indirected provider credentials.

Implements ProtocolKeyValueStore over a plain dictionary. Used by the CLI
(populated from Kubernetes ``Secret`` manifests) and by tests.

Kubernetes Secret Manifest:
    ```yaml
    apiVersion: v1
    kind: Secret
    metadata:
      name: passwordsafe-creds
      namespace: team-a
    data:
      clientid: YWJj            # base64
    stringData:
      clientsecret: plain-text  # wins over data for the same key
    ```
"""

from __future__ import annotations

import base64
import binascii
import logging
import threading
from collections.abc import Iterable, Mapping

from passwordsafe_provider.enums import EnumInfraTransportType
from passwordsafe_provider.errors import (
    ModelInfraErrorContext,
    ProtocolConfigurationError,
)

logger = logging.getLogger(__name__)

KIND_SECRET: str = "Secret"


class InMemoryKeyValueStore:
    """Dictionary-backed ProtocolKeyValueStore.

    ``get`` raises KeyError for unknown secrets, like a real backend would
    raise its not-found error; the credential resolver wraps it.

    Thread Safety:
        Reads and writes are protected by a lock.

    Example:
        >>> store = InMemoryKeyValueStore()
        >>> store.put("default", "creds", {"id": b"abc"})
        >>> store.get("default", "creds")["id"]
        b'abc'
    """

    def __init__(self) -> None:
        self._secrets: dict[tuple[str, str], dict[str, bytes]] = {}
        self._lock = threading.Lock()

    def put(self, namespace: str, name: str, data: Mapping[str, bytes | str]) -> None:
        """Store (or replace) the data of one secret. str values are UTF-8 encoded."""
        encoded = {
            key: value.encode("utf-8") if isinstance(value, str) else bytes(value)
            for key, value in data.items()
        }
        with self._lock:
            self._secrets[(namespace, name)] = encoded

    def get(self, namespace: str, name: str) -> Mapping[str, bytes]:
        with self._lock:
            data = self._secrets.get((namespace, name))
        if data is None:
            raise KeyError(f"secret {namespace}/{name} not found")
        return dict(data)

    def __len__(self) -> int:
        with self._lock:
            return len(self._secrets)

    @classmethod
    def from_manifests(
        cls,
        manifests: Iterable[Mapping[str, object]],
        default_namespace: str = "default",
    ) -> InMemoryKeyValueStore:
        """Build a store from Kubernetes ``Secret`` manifests.

        Documents of any other kind are skipped.

        Args:
            manifests: Parsed manifest documents
            default_namespace: Namespace for secrets without metadata.namespace

        Returns:
            Populated InMemoryKeyValueStore

        Raises:
            ProtocolConfigurationError: If a Secret has no name or invalid base64
        """
        store = cls()
        for manifest in manifests:
            if manifest.get("kind") != KIND_SECRET:
                continue
            metadata = manifest.get("metadata") or {}
            if not isinstance(metadata, Mapping) or not metadata.get("name"):
                raise ProtocolConfigurationError(
                    "Secret manifest has no metadata.name",
                    context=ModelInfraErrorContext.with_correlation(
                        transport_type=EnumInfraTransportType.KEY_VALUE_STORE,
                        operation="load_secret_manifest",
                    ),
                )
            name = str(metadata["name"])
            namespace = str(metadata.get("namespace") or default_namespace)
            store.put(namespace, name, _decode_secret_data(manifest, namespace, name))
            logger.debug(
                "Loaded secret manifest",
                extra={"namespace": namespace, "secret_name": name},
            )
        return store


def _decode_secret_data(
    manifest: Mapping[str, object],
    namespace: str,
    name: str,
) -> dict[str, bytes]:
    data: dict[str, bytes] = {}
    raw_data = manifest.get("data") or {}
    if isinstance(raw_data, Mapping):
        for key, value in raw_data.items():
            try:
                data[str(key)] = base64.b64decode(str(value), validate=True)
            except (binascii.Error, ValueError) as e:
                raise ProtocolConfigurationError(
                    f"Key {key!r} of secret {namespace}/{name} is not valid base64",
                    context=ModelInfraErrorContext.with_correlation(
                        transport_type=EnumInfraTransportType.KEY_VALUE_STORE,
                        operation="load_secret_manifest",
                        target_name=f"{namespace}/{name}",
                    ),
                    secret_key=str(key),
                ) from e
    string_data = manifest.get("stringData") or {}
    if isinstance(string_data, Mapping):
        for key, value in string_data.items():
            data[str(key)] = str(value).encode("utf-8")
    return data


__all__: list[str] = ["InMemoryKeyValueStore", "KIND_SECRET"]
