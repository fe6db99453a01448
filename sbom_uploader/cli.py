"""sbom-upload -- push a CycloneDX SBOM to Dependency-Track.

Usage:
    sbom-upload [-v] upload [--bom PATH] [--project-name NAME] ...
    sbom-upload [-v] status TOKEN
    sbom-upload [-v] ping
"""

from __future__ import annotations

import logging
from typing import Any, NoReturn

import click

from .client import DependencyTrackClient
from .config import resolve_options, validate
from .errors import ConfigurationError, UploaderError
from .models import UploadResult
from .uploader import raise_for_outcome, report, upload


def _fail(err: UploaderError) -> NoReturn:
    """Print a diagnostic and exit with the error's status code."""
    click.echo(f"Error: {err}", err=True)
    cause = getattr(err, "cause", None)
    if cause is not None:
        click.echo(f"Cause: {cause!r}", err=True)
    raise click.exceptions.Exit(err.exit_code)


def _finish(result: UploadResult) -> None:
    report(result, echo=click.echo)
    try:
        raise_for_outcome(result)
    except UploaderError as err:
        _fail(err)


def _server_options(f: Any) -> Any:
    f = click.option(
        "--timeout",
        "timeout_s",
        type=float,
        default=None,
        help="Request timeout in seconds [env: DT_TIMEOUT, default: 30].",
    )(f)
    f = click.option(
        "--api-key",
        default=None,
        help="Dependency-Track API key [env: DT_API_KEY].",
    )(f)
    f = click.option(
        "--base-url",
        default=None,
        help="Dependency-Track base URL [env: DT_BASE_URL, default: http://localhost:8081].",
    )(f)
    return f


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Upload SBOMs to a Dependency-Track server."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command("upload")
@_server_options
@click.option(
    "--project-name", default=None, help="Project name [env: DT_PROJECT_NAME]."
)
@click.option(
    "--project-version", default=None, help="Project version [env: DT_PROJECT_VERSION]."
)
@click.option(
    "--bom",
    "bom_path",
    default=None,
    help="Path to the SBOM file [env: DT_BOM_PATH, default: sbom.json].",
)
def upload_cmd(**options: Any) -> None:
    """Upload an SBOM, creating the project if it does not exist."""
    config = resolve_options(options)
    try:
        result = upload(config)
    except UploaderError as err:
        _fail(err)
    _finish(result)


@cli.command("status")
@_server_options
@click.argument("token")
def status_cmd(token: str, **options: Any) -> None:
    """Check whether the upload identified by TOKEN is still being processed."""
    config = resolve_options(options)
    try:
        if not token.strip():
            raise ConfigurationError("Token must not be empty")
        validate(config)
        client = DependencyTrackClient(
            config.base_url, api_key=config.api_key, timeout_s=config.timeout_s
        )
        result = client.bom_processing(token)
    except UploaderError as err:
        _fail(err)
    if result.ok and isinstance(result.body, dict) and "processing" in result.body:
        state = "processing" if result.body["processing"] else "done"
        click.echo(f"Token {token}: {state}")
    _finish(result)


@cli.command("ping")
@click.option("--base-url", default=None, help="Dependency-Track base URL [env: DT_BASE_URL].")
@click.option("--timeout", "timeout_s", type=float, default=None, help="Request timeout in seconds.")
def ping_cmd(**options: Any) -> None:
    """Check that the server is reachable and print its version."""
    config = resolve_options(options)
    client = DependencyTrackClient(config.base_url, timeout_s=config.timeout_s)
    try:
        result = client.version()
    except UploaderError as err:
        _fail(err)
    _finish(result)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
