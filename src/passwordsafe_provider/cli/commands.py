"""
Password Safe Provider CLI Commands.

Validate secret store manifests and fetch single secrets from the command
line. Credential references are resolved against Kubernetes ``Secret``
manifests passed with ``--secrets``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import NoReturn

import click
from rich.console import Console
from rich.table import Table

from passwordsafe_provider.errors import PasswordSafeProviderError
from passwordsafe_provider.models import ModelSecretStore
from passwordsafe_provider.protocols import ProtocolSecretsClient
from passwordsafe_provider.runtime import (
    PROVIDER_NAME_PASSWORD_SAFE,
    ProviderRegistry,
    load_key_value_store,
    load_secret_store,
    register_default_providers,
)

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _build_registry() -> ProviderRegistry:
    registry = ProviderRegistry()
    register_default_providers(registry)
    return registry


def _fail(error: PasswordSafeProviderError) -> NoReturn:
    err_console.print(f"[bold red]Error:[/bold red] {error}")
    raise SystemExit(1)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log level for the provider's loggers",
)
def cli(log_level: str) -> None:
    """BeyondTrust Password Safe secret store provider."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command("providers")
def providers_cmd() -> None:
    """List the registered providers and their capabilities."""
    registry = _build_registry()
    table = Table(title="Registered Providers")
    table.add_column("Name", style="cyan")
    table.add_column("Capabilities", style="bold")
    for name in registry.list_providers():
        table.add_row(name, registry.get(name).capabilities().value)
    console.print(table)


@cli.command("validate")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
def validate_cmd(manifest: str) -> None:
    """Validate a SecretStore manifest without contacting the vault."""
    console.print(f"[bold blue]Validating {manifest}...[/bold blue]")
    try:
        store = load_secret_store(manifest)
        provider = _build_registry().get(PROVIDER_NAME_PASSWORD_SAFE)
        warnings = provider.validate_store(store)
    except PasswordSafeProviderError as e:
        console.print("[bold red]Store: FAIL[/bold red]")
        _fail(e)

    for warning in warnings:
        console.print(f"  [yellow]Warning: {warning}[/yellow]")
    console.print(f"[bold green]Store {store.namespace}/{store.name}: PASS[/bold green]")


@cli.command("get")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
@click.argument("key")
@click.option(
    "--secrets",
    "secrets_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Kubernetes Secret manifest holding referenced credentials (repeatable)",
)
@click.option(
    "--namespace",
    default=None,
    help="Default namespace for credential references (default: store namespace)",
)
@click.option(
    "--timeout",
    "timeout_seconds",
    type=float,
    default=None,
    help="Bound on the whole retrieval in seconds",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the secret to this file instead of stdout",
)
def get_cmd(
    manifest: str,
    key: str,
    secrets_files: tuple[str, ...],
    namespace: str | None,
    timeout_seconds: float | None,
    output_path: str | None,
) -> None:
    """Fetch KEY from the store described by MANIFEST."""
    try:
        store = load_secret_store(manifest)
        effective_namespace = namespace or store.namespace
        kv_store = load_key_value_store(
            *secrets_files,
            default_namespace=effective_namespace,
        )
        provider = _build_registry().get(PROVIDER_NAME_PASSWORD_SAFE)
        provider.validate_store(store)
        client = provider.new_client(store, kv_store, effective_namespace)
        value = asyncio.run(_fetch(client, key, timeout_seconds))
    except PasswordSafeProviderError as e:
        _fail(e)

    if output_path is not None:
        with open(output_path, "wb") as f:
            f.write(value)
        err_console.print(
            f"[green]Wrote {len(value)} bytes to {output_path}[/green]"
        )
        return
    click.get_binary_stream("stdout").write(value)


async def _fetch(
    client: ProtocolSecretsClient,
    key: str,
    timeout_seconds: float | None,
) -> bytes:
    try:
        return await client.get_secret(key, timeout_seconds=timeout_seconds)
    finally:
        await client.close()


def describe_store(store: ModelSecretStore) -> Table:
    """Render the non-secret parts of a store as a table."""
    config = store.provider_config
    table = Table(title=f"{store.kind} {store.namespace}/{store.name}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    if config is None:
        table.add_row("provider", "[red]missing[/red]")
        return table
    table.add_row("apiurl", config.api_url)
    table.add_row("retrievaltype", config.retrieval_type or "-")
    table.add_row("verifyCA", str(config.verify_ca))
    table.add_row("timeout", f"{config.client_timeout_seconds}s")
    table.add_row("mutual TLS", str(config.certificate is not None))
    return table


@cli.command("describe")
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False))
def describe_cmd(manifest: str) -> None:
    """Show the non-secret configuration of a SecretStore manifest."""
    try:
        store = load_secret_store(manifest)
    except PasswordSafeProviderError as e:
        _fail(e)
    console.print(describe_store(store))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
