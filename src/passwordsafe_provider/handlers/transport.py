# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""HTTP client construction for Password Safe calls.

One httpx.AsyncClient is built per retrieval call and closed when the call
finishes. TLS verification follows ``verify_ca``; when both a client
certificate and key are configured the client presents them (mutual TLS).
"""

from __future__ import annotations

import logging
import os
import ssl
import tempfile
from pathlib import Path

import httpx

from passwordsafe_provider.enums import EnumInfraTransportType
from passwordsafe_provider.errors import (
    ModelInfraErrorContext,
    ProtocolConfigurationError,
)
from passwordsafe_provider.models import ModelResolvedCredentials

logger = logging.getLogger(__name__)


def build_ssl_context(credentials: ModelResolvedCredentials) -> ssl.SSLContext:
    """Build an SSL context with the client certificate chain loaded.

    ``ssl.SSLContext.load_cert_chain`` only reads files, so the PEM material
    is written to a private temporary directory that is removed again before
    returning.

    Raises:
        ProtocolConfigurationError: If the certificate or key cannot be loaded
    """
    context = ssl.create_default_context()
    if not credentials.verify_ca:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

    with tempfile.TemporaryDirectory(prefix="passwordsafe-") as tmp:
        cert_path = Path(tmp) / "client.crt"
        key_path = Path(tmp) / "client.key"
        for path, material in (
            (cert_path, credentials.certificate),
            (key_path, credentials.certificate_key),
        ):
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(material.get_secret_value())
        try:
            context.load_cert_chain(certfile=str(cert_path), keyfile=str(key_path))
        except (ssl.SSLError, OSError) as e:
            raise ProtocolConfigurationError(
                f"Could not load client certificate: {type(e).__name__}",
                context=ModelInfraErrorContext.with_correlation(
                    transport_type=EnumInfraTransportType.HTTP,
                    operation="load_client_certificate",
                    target_name=credentials.api_url,
                ),
            ) from e
    return context


def build_http_client(credentials: ModelResolvedCredentials) -> httpx.AsyncClient:
    """Create the HTTP client for one retrieval call.

    Args:
        credentials: Resolved credentials with timeout and TLS settings

    Returns:
        Unopened httpx.AsyncClient; the caller closes it
    """
    verify: ssl.SSLContext | bool
    if credentials.has_client_certificate:
        verify = build_ssl_context(credentials)
    else:
        verify = credentials.verify_ca

    logger.debug(
        "Building Password Safe HTTP client",
        extra={
            "timeout_seconds": credentials.client_timeout_seconds,
            "verify_ca": credentials.verify_ca,
            "mutual_tls": credentials.has_client_certificate,
        },
    )
    return httpx.AsyncClient(
        timeout=httpx.Timeout(credentials.client_timeout_seconds),
        verify=verify,
    )


__all__: list[str] = ["build_http_client", "build_ssl_context"]
