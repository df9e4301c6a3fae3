# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Secret store providers.

Exports:
    PasswordSafeProvider: Registrable provider for Password Safe stores
    PasswordSafeSecretsClient: Per-store read-only secrets client
"""

from passwordsafe_provider.providers.provider_password_safe import (
    PasswordSafeProvider,
    PasswordSafeSecretsClient,
)

__all__: list[str] = ["PasswordSafeProvider", "PasswordSafeSecretsClient"]
