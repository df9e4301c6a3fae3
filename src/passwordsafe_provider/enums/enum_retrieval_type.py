# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Retrieval type enumeration for Password Safe lookups."""

from enum import Enum


class EnumRetrievalType(str, Enum):
    """How a secret key is looked up in the vault.

    Attributes:
        SECRET: Secrets Safe entry addressed as ``folder/title``
        MANAGED_ACCOUNT: Managed account credential addressed as ``system/account``
    """

    SECRET = "SECRET"
    MANAGED_ACCOUNT = "MANAGED_ACCOUNT"

    def __str__(self) -> str:
        """Return the string value for serialization."""
        return self.value


__all__ = ["EnumRetrievalType"]
