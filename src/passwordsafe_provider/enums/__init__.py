# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Password Safe Provider Enumerations Module.

Exports:
    EnumClientState: Secrets client lifecycle state (CONSTRUCTED, CLOSED)
    EnumInfraTransportType: Transport type used in error context
    EnumProviderErrorCode: Error codes carried by every provider exception
    EnumRetrievalType: Retrieval strategy selector (SECRET, MANAGED_ACCOUNT)
    EnumStoreCapability: Capability advertised to the orchestrator
    EnumValidationResult: Outcome of a client self-check
"""

from passwordsafe_provider.enums.enum_client_state import EnumClientState
from passwordsafe_provider.enums.enum_infra_transport_type import (
    EnumInfraTransportType,
)
from passwordsafe_provider.enums.enum_provider_error_code import EnumProviderErrorCode
from passwordsafe_provider.enums.enum_retrieval_type import EnumRetrievalType
from passwordsafe_provider.enums.enum_store_capability import EnumStoreCapability
from passwordsafe_provider.enums.enum_validation_result import EnumValidationResult

__all__: list[str] = [
    "EnumClientState",
    "EnumInfraTransportType",
    "EnumProviderErrorCode",
    "EnumRetrievalType",
    "EnumStoreCapability",
    "EnumValidationResult",
]
