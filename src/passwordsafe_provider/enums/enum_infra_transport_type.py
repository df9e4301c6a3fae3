# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure Transport Type Enumeration.

Defines the transport types the provider talks over.
Used for error context and log correlation.
"""

from enum import Enum


class EnumInfraTransportType(str, Enum):
    """Transport types used by the Password Safe provider.

    Attributes:
        HTTP: Generic HTTP transport (client construction, TLS setup)
        PASSWORD_SAFE: Password Safe vault REST API
        KEY_VALUE_STORE: External key-value store holding indirected credentials
        RUNTIME: Provider-internal operations (validation, dispatch, registry)
    """

    HTTP = "http"
    PASSWORD_SAFE = "passwordsafe"
    KEY_VALUE_STORE = "kv_store"
    RUNTIME = "runtime"


__all__ = ["EnumInfraTransportType"]
