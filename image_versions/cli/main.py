"""Command-line interface for image-versions-action.

Prints the build version matrix of a flavor as pretty-printed JSON on stdout.
Options fall back to environment variables; see ``image_versions.config``.
"""

import json
import os
import sys
from typing import Any, Callable, Optional

import click
import sentry_sdk

from image_versions import __version__
from image_versions._sources import FetchCache
from image_versions.config import Config, load_config
from image_versions.console import (
    IS_GITHUB_ACTIONS,
    gha_error,
    gha_group,
    gha_warning,
    print_flavors_table,
    print_versions_table,
)
from image_versions.exceptions import (
    ConfigurationError,
    ImageVersionsError,
    VersionNotFoundError,
)
from image_versions.http_client import create_session
from image_versions.logging_config import logger, set_log_level
from image_versions.versions import VersionMatrix, create_default_registry

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def evaluate_boolean(value: str) -> bool:
    """
    Evaluate string values as boolean.

    Args:
        value: String value to evaluate

    Returns:
        Boolean result
    """
    return value.lower() in ["true", "yes", "yeah", "1"]


def initialize_sentry() -> None:
    """
    Initialize Sentry for error tracking.

    Sentry is only enabled when SENTRY_DSN is set and TELEMETRY is not
    explicitly disabled.
    """
    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn:
        return
    if not evaluate_boolean(os.getenv("TELEMETRY", "true")):
        logger.debug("Telemetry disabled, not initializing Sentry")
        return

    def before_send(event, hint):
        """
        Filter events before sending to Sentry.
        Don't send configuration or lookup errors - these are user errors.
        """
        if "exc_info" in hint:
            exc_type, exc_value, tb = hint["exc_info"]
            # VersionFetchError and VersionValidationError should still be sent (upstream or tool bugs)
            if isinstance(exc_value, (ConfigurationError, VersionNotFoundError)):
                return None
        return event

    sentry_sdk.init(
        dsn=sentry_dsn,
        send_default_pii=False,
        traces_sample_rate=0.0,
        before_send=before_send,
    )


def build_config(
    github_token: Optional[str] = None,
    package_owner: Optional[str] = None,
    attempts: Optional[int] = None,
    retry_delay: Optional[float] = None,
    log_level: Optional[str] = None,
) -> Config:
    """
    Build a validated Config from CLI options, falling back to the environment.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    return load_config(
        {
            "github_token": github_token,
            "package_owner": package_owner,
            "attempts": attempts,
            "retry_delay": retry_delay,
            "log_level": log_level,
        }
    )


def create_matrix(config: Config, flavor_name: str) -> VersionMatrix:
    """Create the version matrix service for one flavor with fresh per-run state."""
    registry = create_default_registry(config, create_session(), FetchCache())
    flavor = registry.get_required(flavor_name)
    if not config.github_token:
        gha_warning("GITHUB_TOKEN is not set; GitHub API requests are unauthenticated and may be rate limited")
    return VersionMatrix(flavor)


def _run(action: str, operation: Callable[[], Any], summary: Optional[Callable[[Any], None]] = None) -> None:
    """Run an operation, print its result as JSON and exit 1 on failure."""
    try:
        result = operation()
    except ImageVersionsError as e:
        logger.debug(f"{action} failed", exc_info=True)
        gha_error(str(e), title=f"Error {action}")
        sys.exit(1)

    click.echo(json.dumps(result, indent=2))

    if IS_GITHUB_ACTIONS and summary is not None:
        with gha_group("Summary"):
            summary(result)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (env: LOG_LEVEL).",
)
@click.option("--github-token", default=None, help="GitHub API token (env: GITHUB_TOKEN).")
@click.option(
    "--package-owner",
    default=None,
    help="Owner of the published container packages (env: PACKAGE_OWNER, GITHUB_REPOSITORY_OWNER).",
)
@click.option("--attempts", type=int, default=None, help="Attempts per upstream fetch (env: FETCH_ATTEMPTS).")
@click.option(
    "--retry-delay",
    type=float,
    default=None,
    help="Initial delay between fetch attempts in seconds (env: FETCH_RETRY_DELAY).",
)
@click.version_option(version=__version__, prog_name="image-versions")
@click.pass_context
def cli(
    ctx: click.Context,
    log_level: Optional[str],
    github_token: Optional[str],
    package_owner: Optional[str],
    attempts: Optional[int],
    retry_delay: Optional[float],
) -> None:
    """Select, format and validate Docker image build versions."""
    try:
        config = build_config(
            github_token=github_token,
            package_owner=package_owner,
            attempts=attempts,
            retry_delay=retry_delay,
            log_level=log_level,
        )
    except ConfigurationError as e:
        gha_error(str(e), title="Configuration error")
        sys.exit(1)

    set_log_level(config.log_level)
    initialize_sentry()
    ctx.obj = config


@cli.command()
@click.argument("flavor")
@click.argument("version", required=False)
@click.pass_obj
def versions(config: Config, flavor: str, version: Optional[str]) -> None:
    """Print the versions of FLAVOR to build, or the entry of one VERSION."""
    if version is None:
        _run(
            "fetching versions",
            lambda: create_matrix(config, flavor).get_versions(),
            summary=lambda result: print_versions_table(f"{flavor} versions", result),
        )
    else:
        _run("fetching version", lambda: create_matrix(config, flavor).get_version(version))


@cli.command()
@click.argument("flavor")
@click.argument("version", required=False)
@click.pass_obj
def images(config: Config, flavor: str, version: Optional[str]) -> None:
    """Print the published images of FLAVOR still supported, or the image of one VERSION."""
    if version is None:
        _run(
            "fetching image versions",
            lambda: create_matrix(config, flavor).get_image_versions(),
            summary=lambda result: print_versions_table(f"{flavor} images", result),
        )
    else:
        _run("fetching image version", lambda: create_matrix(config, flavor).get_image_version(version))


@cli.command()
@click.pass_obj
def flavors(config: Config) -> None:
    """List the supported version flavors."""

    def list_flavors() -> Any:
        registry = create_default_registry(config, create_session(), FetchCache())
        return registry.list_flavors()

    _run("listing flavors", list_flavors, summary=print_flavors_table)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
