# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Password Safe Provider - BeyondTrust Password Safe secret store adapter.

This package lets a secret orchestrator read secrets from a BeyondTrust
Password Safe style vault:

- Credential resolution: provider credentials given literally or by
  reference into an external key-value store
- Store validation: manifest shape and endpoint checks before any I/O
- Authentication: OAuth client credentials handshake with bounded
  exponential backoff
- Retrieval: Secrets Safe (``folder/title``) and managed account
  (``system/account``) strategies behind one dispatcher

Key Components:
    - PasswordSafeProvider: Registrable provider, builds per-store clients
    - PasswordSafeSecretsClient: Read-only client serving get_secret()
    - ProviderRegistry: Explicit provider registration, no import-time magic
"""

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
