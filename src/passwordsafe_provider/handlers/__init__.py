# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Password Safe vault handlers.

Exports:
    PasswordSafeAuthenticator: Token and sign-in handshake with backoff
    SecretsSafeStrategy: ``folder/title`` Secrets Safe lookups
    ManagedAccountStrategy: ``system/account`` managed credential requests
    RetrievalDispatcher: Retrieval type to strategy routing
    build_http_client: Per-call httpx client with TLS settings
"""

from passwordsafe_provider.handlers.handler_authenticator import (
    PasswordSafeAuthenticator,
)
from passwordsafe_provider.handlers.handler_managed_account_strategy import (
    ManagedAccountStrategy,
)
from passwordsafe_provider.handlers.handler_retrieval_dispatcher import (
    RetrievalDispatcher,
)
from passwordsafe_provider.handlers.handler_secret_strategy import SecretsSafeStrategy
from passwordsafe_provider.handlers.transport import (
    build_http_client,
    build_ssl_context,
)

__all__: list[str] = [
    "ManagedAccountStrategy",
    "PasswordSafeAuthenticator",
    "RetrievalDispatcher",
    "SecretsSafeStrategy",
    "build_http_client",
    "build_ssl_context",
]
