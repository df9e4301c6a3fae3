# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure Error Context Configuration Model.

This module defines the configuration model for infrastructure error context,
encapsulating common structured fields to reduce __init__ parameter count
while keeping them strongly typed.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from passwordsafe_provider.enums import EnumInfraTransportType


class ModelInfraErrorContext(BaseModel):
    """Configuration model for infrastructure error context.

    Attributes:
        transport_type: Type of transport (PASSWORD_SAFE, KEY_VALUE_STORE, etc.)
        operation: Operation being performed (authenticate, get_secret, etc.)
        target_name: Target resource or endpoint name
        correlation_id: Request correlation ID for distributed tracing

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.PASSWORD_SAFE,
        ...     operation="authenticate",
        ...     target_name="passwordsafe-provider",
        ...     correlation_id=uuid4(),
        ... )
        >>> raise InfraAuthenticationError("Token request rejected", context=context)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    transport_type: EnumInfraTransportType | None = Field(
        default=None,
        description="Type of infrastructure transport (PASSWORD_SAFE, KEY_VALUE_STORE, etc.)",
    )
    operation: str | None = Field(
        default=None,
        description="Operation being performed (authenticate, get_secret, etc.)",
    )
    target_name: str | None = Field(
        default=None,
        description="Target resource or endpoint name",
    )
    correlation_id: UUID | None = Field(
        default=None,
        description="Request correlation ID for distributed tracing",
    )

    @classmethod
    def with_correlation(
        cls,
        correlation_id: UUID | None = None,
        **kwargs: object,
    ) -> ModelInfraErrorContext:
        """Build a context, generating a correlation ID when none is given.

        Args:
            correlation_id: Correlation ID to propagate (uuid4() when None)
            **kwargs: Remaining context fields

        Returns:
            ModelInfraErrorContext with a correlation ID always set
        """
        return cls(correlation_id=correlation_id or uuid4(), **kwargs)


__all__ = ["ModelInfraErrorContext"]
