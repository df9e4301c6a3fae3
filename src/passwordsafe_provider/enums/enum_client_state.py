# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secrets client lifecycle state enumeration."""

from enum import Enum


class EnumClientState(str, Enum):
    """Lifecycle states of a secrets client.

    A client only exists once construction succeeded, so there is no
    state for a partially built client.
    """

    CONSTRUCTED = "constructed"
    CLOSED = "closed"


__all__ = ["EnumClientState"]
