# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secret store capability enumeration."""

from enum import Enum


class EnumStoreCapability(str, Enum):
    """Operations a secret store provider advertises to the orchestrator."""

    READ_ONLY = "ReadOnly"
    WRITE_ONLY = "WriteOnly"
    READ_WRITE = "ReadWrite"


__all__ = ["EnumStoreCapability"]
