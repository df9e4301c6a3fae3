# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Backoff configuration for the authentication handshake."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ModelBackoffConfig(BaseModel):
    """Exponential backoff schedule for authentication retries.

    Each delay is ``interval * (1 +/- randomization_factor)``; the interval
    grows by ``multiplier`` after every attempt up to ``max_interval_seconds``.
    Retrying stops once the next delay would push the elapsed time past
    ``max_elapsed_time_seconds``.

    Attributes:
        initial_interval_seconds: First interval before jitter (default 1s)
        randomization_factor: Jitter ratio applied to each interval (default 0.5)
        multiplier: Interval growth factor per attempt (default 2.0)
        max_interval_seconds: Cap on the un-jittered interval (default 60s)
        max_elapsed_time_seconds: Total retry budget (default 15 minutes)
        retry_on_client_error: Retry 4xx credential rejections too (default True)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    initial_interval_seconds: float = Field(
        default=1.0,
        gt=0.0,
        description="First retry interval in seconds, before jitter",
    )
    randomization_factor: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Jitter ratio applied to each interval",
    )
    multiplier: float = Field(
        default=2.0,
        ge=1.0,
        description="Interval growth factor per attempt",
    )
    max_interval_seconds: float = Field(
        default=60.0,
        gt=0.0,
        description="Upper bound on the un-jittered interval",
    )
    max_elapsed_time_seconds: float = Field(
        default=900.0,
        gt=0.0,
        description="Total time budget for retries in seconds",
    )
    retry_on_client_error: bool = Field(
        default=True,
        description="Retry 4xx credential rejections instead of failing fast",
    )


__all__: list[str] = ["ModelBackoffConfig"]
