"""
qtumscan-rpc CLI

Command-line access to a Qtum node's JSON-RPC interface.

Connection settings come from options, then QTUM_RPC_* environment
variables, then ~/.qtumscan/.env.

Commands:
  call     - Invoke one RPC method
  batch    - Send several calls from a JSON file as one batch
  methods  - List known methods and their parameter types
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
import sys
from pathlib import Path
from typing import Any, Optional

import click

from .config import ClientConfig
from .errors import RpcError
from .log import PROFILES, RpcLogger, make_logger
from .rpc.client import RpcClient
from .rpc.methods import MethodTable


# ============ Constants ============

VERSION = "1.0.0"


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="qtumscan-rpc")
@click.option("--host", default=None, help="Node host (env: QTUM_RPC_HOST)")
@click.option("--port", default=None, type=int, help="Node RPC port (env: QTUM_RPC_PORT)")
@click.option("--user", default=None, help="RPC username (env: QTUM_RPC_USER)")
@click.option("--password", default=None, help="RPC password (env: QTUM_RPC_PASS)")
@click.option(
    "--protocol",
    type=click.Choice(["http", "https"]),
    default=None,
    help="Transport protocol (env: QTUM_RPC_PROTOCOL)",
)
@click.option("--insecure", is_flag=True, help="Skip TLS certificate verification")
@click.option("--timeout", default=None, type=float, help="Request timeout in seconds")
@click.option(
    "--network",
    type=click.Choice(["mainnet", "testnet"]),
    default=None,
    help="Pick the default port for a network",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to .env file (default: ~/.qtumscan/.env)",
)
@click.option(
    "--log",
    "log_profile",
    type=click.Choice(sorted(PROFILES)),
    default="normal",
    show_default=True,
    help="Log profile",
)
@click.pass_context
def cli(
    ctx: click.Context,
    host: Optional[str],
    port: Optional[int],
    user: Optional[str],
    password: Optional[str],
    protocol: Optional[str],
    insecure: bool,
    timeout: Optional[float],
    network: Optional[str],
    env_file: Optional[Path],
    log_profile: str,
) -> None:
    """Qtum node JSON-RPC client."""
    ctx.ensure_object(dict)
    ctx.obj.update(
        host=host,
        port=port,
        user=user,
        password=password,
        protocol=protocol,
        insecure=insecure,
        timeout=timeout,
        network=network,
        env_file=env_file,
        log_profile=log_profile,
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Commands ============


@cli.command()
@click.argument("method")
@click.argument("args", nargs=-1)
@click.option(
    "--json",
    "-j",
    "json_args",
    is_flag=True,
    help="Decode each argument as JSON when it parses",
)
@click.pass_obj
def call(options: dict[str, Any], method: str, args: tuple[str, ...], json_args: bool) -> None:
    """Invoke METHOD with ARGS and print the result as JSON."""
    params = [_decode_arg(arg) for arg in args] if json_args else list(args)
    config, logger = _load_settings(options)

    async def _run() -> Any:
        async with _make_client(config, logger) as client:
            return await client.invoke(method, *params)

    result = _run_or_exit(_run)
    _print_json(result)


@cli.command()
@click.argument("file", type=click.File("r", encoding="utf-8"))
@click.pass_obj
def batch(options: dict[str, Any], file: Any) -> None:
    """
    Send the calls listed in FILE as one JSON-RPC batch.

    FILE holds a JSON array of [method, arg, ...] entries ("-" reads stdin).
    """
    try:
        entries = json.load(file)
        if not isinstance(entries, list) or not all(
            isinstance(e, list) and e and isinstance(e[0], str) for e in entries
        ):
            raise ValueError("Batch file must be a JSON array of [method, ...args] arrays")
    except (json.JSONDecodeError, ValueError) as exc:
        click.secho(f"ERROR: Invalid batch file: {exc}", fg="red")
        sys.exit(1)

    config, logger = _load_settings(options)

    def _build(session: Any) -> None:
        for method, *params in entries:
            session.invoke(method, *params)

    async def _run() -> Any:
        async with _make_client(config, logger) as client:
            return await client.batch(_build)

    _print_json(_run_or_exit(_run))


@cli.command()
@click.argument("name", required=False)
def methods(name: Optional[str]) -> None:
    """List known methods (or show one) with their parameter types."""
    table = MethodTable.default()
    if name:
        spec = table.get(name)
        if spec is None:
            click.secho(f"Unknown method: {name}", fg="red")
            sys.exit(1)
        specs = [spec]
    else:
        specs = list(table)

    for spec in specs:
        tags = ", ".join(spec.tags) if spec.tags else "-"
        click.echo(
            click.style(f"  {spec.name:<24}", fg="bright_white")
            + click.style(tags, dim=True)
        )


# ============ Helper Functions ============


def _load_settings(options: dict[str, Any]) -> tuple[ClientConfig, RpcLogger]:
    overrides: dict[str, Any] = {}
    for key in ("host", "port", "user", "password", "timeout"):
        if options.get(key) is not None:
            overrides[key] = options[key]
    if options.get("protocol") is not None:
        overrides["use_tls"] = options["protocol"] != "http"
    if options.get("insecure"):
        overrides["reject_unauthorized"] = False

    try:
        config = ClientConfig.from_env(
            env_path=options.get("env_file"), network=options.get("network")
        )
        config = dataclasses.replace(config, **overrides)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    return config, make_logger(options.get("log_profile", "normal"))


def _make_client(config: ClientConfig, logger: RpcLogger) -> RpcClient:
    return RpcClient(config, logger=logger)


def _run_or_exit(coro_fn: Any) -> Any:
    try:
        return asyncio.run(coro_fn())
    except RpcError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)


def _decode_arg(arg: str) -> Any:
    try:
        return json.loads(arg)
    except json.JSONDecodeError:
        return arg


def _print_json(value: Any) -> None:
    if isinstance(value, str):
        click.echo(value)
    else:
        click.echo(json.dumps(value, indent=2, sort_keys=True))


# ============ Entry Points ============


def main() -> None:
    """qtumscan-rpc CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
