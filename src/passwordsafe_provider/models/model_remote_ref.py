# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Remote reference handed in by the orchestrator for one secret."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelRemoteRef(BaseModel):
    """Which remote secret to fetch.

    Only ``key`` is used by this provider; ``property`` and ``version`` are
    accepted so orchestrator payloads validate unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    key: str = Field(description="Two-segment secret key")
    property: str = Field(default="", description="Unused by this provider")
    version: str = Field(default="", description="Unused by this provider")


__all__: list[str] = ["ModelRemoteRef"]
