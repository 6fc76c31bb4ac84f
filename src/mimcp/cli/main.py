"""CLI entry point for mimcp."""

from __future__ import annotations

import asyncio
import json
import sys

import click
from rich.console import Console
from rich.table import Table

from mimcp.types.config import SERVER_VERSION

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group(invoke_without_command=True)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Diagnostic log level (default: $MIMCP_LOG_LEVEL or INFO)",
)
@click.option("--plain-logs", is_flag=True, help="Plain log lines instead of rich output")
@click.option(
    "--otel-exporter",
    type=click.Choice(["none", "console", "otlp"]),
    default=None,
    help="OpenTelemetry exporter (default: $MIMCP_OTEL_EXPORTER or none)",
)
@click.version_option(SERVER_VERSION, prog_name="mimcp")
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: str | None,
    plain_logs: bool,
    otel_exporter: str | None,
) -> None:
    """mimcp -- MCP tool server over stdio.

    \b
    Usage:
      mimcp                 (serve on stdin/stdout)
      mimcp serve
      mimcp tools --json
    """
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level
    ctx.obj["plain_logs"] = plain_logs
    ctx.obj["otel_exporter"] = otel_exporter
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve_cmd)


@cli.command("serve")
@click.pass_context
def serve_cmd(ctx: click.Context) -> None:
    """Serve the built-in tools on stdin/stdout until the client disconnects."""
    from mimcp.core.config import load_server_config
    from mimcp.core.engine import serve
    from mimcp.core.logs import configure_logging
    from mimcp.types.errors import MimcpError, TransportClosedError

    opts = ctx.obj or {}
    config = load_server_config(
        log_level=(opts.get("log_level") or "").upper() or None,
        otel_exporter=opts.get("otel_exporter"),
    )
    configure_logging(config.log_level, rich=not opts.get("plain_logs"))

    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        pass
    except TransportClosedError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    except MimcpError as exc:
        click.echo(f"Startup failed: {exc}", err=True)
        sys.exit(2)


@cli.command("tools")
@click.option("--json", "as_json", is_flag=True, help="Print the tools/list payload as JSON")
def tools_cmd(as_json: bool) -> None:
    """List the tools this server advertises."""
    from mimcp.protocol.mcp import tools_list_result
    from mimcp.tools.registry import build_default_registry

    definitions = build_default_registry().list_definitions()
    if as_json:
        click.echo(json.dumps(tools_list_result(definitions), indent=2, ensure_ascii=False))
        return

    table = Table(title="mimcp tools")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Parameters")
    table.add_column("Description")
    for d in definitions:
        params = ", ".join(
            f"{p.name}: {p.type.value}" + ("" if p.required else f" = {p.default!r}")
            for p in d.parameters
        )
        table.add_row(d.name, params, d.description)
    Console().print(table)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
