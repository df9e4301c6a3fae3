# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Client validation result enumeration."""

from enum import Enum


class EnumValidationResult(str, Enum):
    """Outcome of a secrets client self-check.

    Attributes:
        READY: The client verified it can reach the vault
        UNKNOWN: The client cannot tell without performing a retrieval
        ERROR: The client is known to be unusable
    """

    READY = "Ready"
    UNKNOWN = "Unknown"
    ERROR = "Error"


__all__ = ["EnumValidationResult"]
