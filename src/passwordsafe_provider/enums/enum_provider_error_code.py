# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Provider error code enumeration.

Every exception raised by the provider carries one of these codes so that
callers can classify failures without matching on message text.
"""

from enum import Enum


class EnumProviderErrorCode(str, Enum):
    """Error codes for the Password Safe provider."""

    OPERATION_FAILED = "OPERATION_FAILED"
    NOT_IMPLEMENTED = "NOT_IMPLEMENTED"

    # Configuration
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    NIL_STORE = "NIL_STORE"
    MISSING_SPEC = "MISSING_SPEC"
    MISSING_PROVIDER = "MISSING_PROVIDER"
    MISSING_PROVIDER_BLOCK = "MISSING_PROVIDER_BLOCK"
    INVALID_HOST_URL = "INVALID_HOST_URL"

    # Credential resolution
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    CONFLICTING_CREDENTIAL_SOURCE = "CONFLICTING_CREDENTIAL_SOURCE"
    MISSING_SOURCE = "MISSING_SOURCE"
    MISSING_SECRET_NAME = "MISSING_SECRET_NAME"
    MISSING_SECRET_KEY = "MISSING_SECRET_KEY"
    STORE_LOOKUP_FAILED = "STORE_LOOKUP_FAILED"
    NO_SUCH_KEY = "NO_SUCH_KEY"

    # Transport and authentication
    CONNECTION_ERROR = "CONNECTION_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    REQUEST_REJECTED = "REQUEST_REJECTED"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    AUTHENTICATION_EXHAUSTED = "AUTHENTICATION_EXHAUSTED"

    # Retrieval
    MALFORMED_KEY = "MALFORMED_KEY"
    UNSUPPORTED_RETRIEVAL_TYPE = "UNSUPPORTED_RETRIEVAL_TYPE"
    SECRET_NOT_FOUND = "SECRET_NOT_FOUND"
    SECRET_TOO_LARGE = "SECRET_TOO_LARGE"


__all__ = ["EnumProviderErrorCode"]
