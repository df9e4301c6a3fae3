# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Password Safe Provider Mixins.

Exports:
    MixinPasswordSafeHttp: Request helpers and status-to-error mapping
    MAX_ERROR_BODY_BYTES: Cap on how much of a streamed error body is read
"""

from passwordsafe_provider.mixins.mixin_password_safe_http import (
    MAX_ERROR_BODY_BYTES,
    MixinPasswordSafeHttp,
    sanitize_response_body,
)

__all__: list[str] = [
    "MAX_ERROR_BODY_BYTES",
    "MixinPasswordSafeHttp",
    "sanitize_response_body",
]
