from __future__ import annotations

import json
import logging
import mimetypes
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import click

from . import __version__
from .api import DataService
from .config import QBConfig
from .data import Entity, QueryResponse
from .env_loader import load_env_files
from .exceptions import FaultException, QuickbooksError
from .logging_config import configure_logging

_logger = logging.getLogger(__name__)

# Load .env very early, so everything else sees env vars
load_env_files()


def _to_json(value: Any) -> Any:
    if isinstance(value, (Entity, QueryResponse)):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: _to_json(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_json(v) for v in value]
    return value


def _echo(value: Any, pretty: bool) -> None:
    click.echo(json.dumps(_to_json(value), indent=2 if pretty else None))


def _service() -> DataService:
    return DataService(QBConfig.from_env())


def _fail(e: QuickbooksError) -> None:
    if isinstance(e, FaultException):
        for err in e.errors:
            click.echo(f"[{err.code}] {err.message}: {err.detail}", err=True)
        if not e.errors:
            click.echo(str(e), err=True)
    else:
        click.echo(f"Error: {e}", err=True)
    raise click.Abort() from None


pretty_option = click.option("--pretty", is_flag=True, help="Pretty-print JSON.")


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
)
@click.version_option(__version__, "--version", prog_name="qbodata")
@click.option(
    "-v",
    "--verbose",
    "loglevel",
    flag_value=logging.INFO,
    default=None,
    help="Enable INFO logs.",
)
@click.option(
    "-vv",
    "--very-verbose",
    "loglevel",
    flag_value=logging.DEBUG,
    help="Enable DEBUG logs.",
)
@click.pass_context
def cli(ctx: click.Context, loglevel: Optional[int]) -> None:
    """QuickBooks Online data service CLI. Credentials come from QBO_* env vars."""
    configure_logging(loglevel)
    _logger.debug("CLI start, version=%s", __version__)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command("query")
@click.argument("query", required=False)
@click.option("--entity", "-e", help="Entity to select from when QUERY is omitted.")
@click.option("--minor-version", type=int, default=None, help="API minor version.")
@pretty_option
def cmd_query(query: Optional[str], entity: Optional[str], minor_version: Optional[int], pretty: bool) -> None:
    """Run a query, e.g. "select * from Invoice where TotalAmt > '100'"."""
    if query is None and not entity:
        raise click.UsageError("Give a QUERY or --entity.")
    try:
        service = _service()
        if entity:
            service.set_entity(entity)
        _echo(service.query(query, minor_version), pretty)
    except QuickbooksError as e:
        _fail(e)


@cli.command("read")
@click.argument("entity")
@click.argument("entity_id")
@pretty_option
def cmd_read(entity: str, entity_id: str, pretty: bool) -> None:
    """Read one ENTITY record by ENTITY_ID."""
    try:
        _echo(_service().set_entity(entity).read(entity_id), pretty)
    except QuickbooksError as e:
        _fail(e)


@cli.command("cdc")
@click.argument("entities", nargs=-1, required=True)
@click.option(
    "--since",
    "changed_since",
    required=True,
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M:%S%z"]),
    help="Return changes since this timestamp (naive values are UTC).",
)
@pretty_option
def cmd_cdc(entities: tuple[str, ...], changed_since: datetime, pretty: bool) -> None:
    """List ENTITIES changed since --since, grouped by entity type."""
    try:
        _echo(_service().cdc(entities, changed_since), pretty)
    except QuickbooksError as e:
        _fail(e)


@cli.command("upload")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--content-type", default=None, help="MIME type; guessed from the file name if omitted.")
@pretty_option
def cmd_upload(path: Path, content_type: Optional[str], pretty: bool) -> None:
    """Upload a file as an Attachable."""
    content_type = content_type or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    try:
        service = _service().set_entity("Attachable")
        _echo(service.upload(path.name, content_type, path.read_bytes()), pretty)
    except QuickbooksError as e:
        _fail(e)
