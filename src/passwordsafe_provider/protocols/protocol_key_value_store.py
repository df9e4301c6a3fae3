# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for the external key-value store.

Provider credentials may be stored outside the store manifest and referenced
by ``namespace/name[key]``. The key-value store is the backend those
references point into; in a Kubernetes deployment it is the API server's
Secret resource.

Example Usage:
    ```python
    from kubernetes import client

    class KubernetesSecretStore:
        def __init__(self, core_v1: client.CoreV1Api) -> None:
            self._core_v1 = core_v1

        def get(self, namespace: str, name: str) -> Mapping[str, bytes]:
            secret = self._core_v1.read_namespaced_secret(name, namespace)
            return {k: base64.b64decode(v) for k, v in (secret.data or {}).items()}
    ```

Error Handling:
    Implementations raise whatever their transport raises (including a
    not-found error). The credential resolver wraps every failure in
    StoreLookupFailedError, so implementations do not need to translate.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

__all__ = [
    "ProtocolKeyValueStore",
]


@runtime_checkable
class ProtocolKeyValueStore(Protocol):
    """Read-only access to named key-value bags.

    Lookups are synchronous and are only performed while a secrets client
    is being constructed.
    """

    def get(self, namespace: str, name: str) -> Mapping[str, bytes]:
        """Return the data of secret ``name`` in ``namespace``.

        Args:
            namespace: Namespace to look in
            name: Secret name

        Returns:
            Mapping of key to raw bytes

        Raises:
            Exception: Implementation specific, including not-found
        """
        ...
