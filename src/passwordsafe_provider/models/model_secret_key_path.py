# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Two-segment secret key path model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from passwordsafe_provider.errors import MalformedKeyError, ModelInfraErrorContext
from passwordsafe_provider.enums import EnumInfraTransportType

KEY_DELIMITER: str = "/"


class ModelSecretKeyPath(BaseModel):
    """A secret key split into its two segments.

    For SECRET retrieval the segments are ``folder`` and ``title``; for
    MANAGED_ACCOUNT they are ``system`` and ``account``. Keys are always
    written ``a/b``; the vault's folder separator is an API parameter and
    does not change how keys are split.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    first: str = Field(min_length=1, description="Folder or system name")
    second: str = Field(min_length=1, description="Title or account name")

    @classmethod
    def parse(cls, key: str) -> ModelSecretKeyPath:
        """Split ``key`` on ``/`` into exactly two non-empty segments.

        Keys with more than two segments are rejected rather than truncated.

        Raises:
            MalformedKeyError: If the key does not have exactly two segments
        """
        segments = key.split(KEY_DELIMITER)
        if len(segments) != 2 or not all(segments):
            context = ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.RUNTIME,
                operation="parse_key",
            )
            raise MalformedKeyError(
                f"Secret key must have the form 'a{KEY_DELIMITER}b', got "
                f"{len(segments)} segment(s)",
                context=context,
                secret_key=key,
                segment_count=len(segments),
            )
        return cls(first=segments[0], second=segments[1])

    def join(self) -> str:
        return f"{self.first}{KEY_DELIMITER}{self.second}"


__all__: list[str] = ["KEY_DELIMITER", "ModelSecretKeyPath"]
