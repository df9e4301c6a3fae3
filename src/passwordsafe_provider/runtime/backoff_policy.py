# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Exponential backoff with jitter and an elapsed-time budget.

The policy hands out one delay per failed attempt. Each delay is the current
interval randomized by ``+/- randomization_factor``; the interval then grows
by ``multiplier`` up to ``max_interval_seconds``. Once the elapsed time plus
the next delay would exceed ``max_elapsed_time_seconds`` the policy returns
None, meaning stop.

Clock and random source are injectable so retry loops can be driven without
waiting in tests.

Example:
    >>> policy = ExponentialBackoffPolicy(ModelBackoffConfig())
    >>> policy.reset()
    >>> delay = policy.next_backoff()   # ~0.5s .. 1.5s
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable

from passwordsafe_provider.models import ModelBackoffConfig


class ExponentialBackoffPolicy:
    """Stateful backoff schedule for one retry loop.

    Not shared between loops; create one per operation and call reset()
    before the first attempt.
    """

    def __init__(
        self,
        config: ModelBackoffConfig,
        *,
        clock: Callable[[], float] = time.monotonic,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config
        self._clock = clock
        self._rng = rng or random.Random()
        self._current_interval = config.initial_interval_seconds
        self._started_at = clock()

    @property
    def config(self) -> ModelBackoffConfig:
        return self._config

    @property
    def elapsed_seconds(self) -> float:
        """Seconds since the last reset()."""
        return self._clock() - self._started_at

    @property
    def current_interval(self) -> float:
        return self._current_interval

    def reset(self) -> None:
        """Restart the schedule and the elapsed-time budget."""
        self._current_interval = self._config.initial_interval_seconds
        self._started_at = self._clock()

    def next_backoff(self) -> float | None:
        """Return the next delay in seconds, or None when the budget is spent."""
        elapsed = self.elapsed_seconds
        delay = self._randomize(self._current_interval)
        self._grow_interval()
        if elapsed + delay > self._config.max_elapsed_time_seconds:
            return None
        return delay

    def _randomize(self, interval: float) -> float:
        delta = self._config.randomization_factor * interval
        low = interval - delta
        high = interval + delta
        return low + self._rng.random() * (high - low)

    def _grow_interval(self) -> None:
        cap = self._config.max_interval_seconds
        if self._current_interval >= cap / self._config.multiplier:
            self._current_interval = cap
        else:
            self._current_interval *= self._config.multiplier


__all__: list[str] = ["ExponentialBackoffPolicy"]
