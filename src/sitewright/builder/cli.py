"""The `sitewright` command-line interface."""

import importlib.metadata
from pathlib import Path

import click
from pyvider.telemetry import LoggingConfig, TelemetryConfig, setup_telemetry

from .config import load_site_config
from .exceptions import BuildError
from .models import BuildOverrides
from .pipeline.orchestrator import BuildOrchestrator

try:
    __version__ = importlib.metadata.version("sitewright-builder")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"

INVALID_PROJECT_MESSAGE = (
    "Please create a valid sitewright project or fix your app structure "
    "before trying to run this command again."
)


def _configure_logging(verbose: bool) -> None:
    setup_telemetry(
        TelemetryConfig(
            service_name="sitewright",
            logging=LoggingConfig(default_level="DEBUG" if verbose else "WARNING"),
        )
    )


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="sitewright",
    message="%(prog)s version %(version)s",
)
def cli() -> None:
    """Static site build tool."""
    pass


@cli.command("build")
@click.option(
    "--dir",
    "-d",
    "build_dir",
    default="",
    help="Change the name of the build directory.",
)
@click.option("--verbose", "-v", is_flag=True, help="Show log messages.")
@click.option("--benchmark", "-b", is_flag=True, help="Display build time statistics.")
@click.option(
    "--nodejs",
    "-n",
    is_flag=True,
    help="Use the system's Node.js to build instead of the in-process build.",
)
def build_command(build_dir: str, verbose: bool, benchmark: bool, nodejs: bool) -> None:
    """
    Build generates the HTML, JS, and CSS for your site into a directory of
    your choosing. The files it creates are all you need to deploy.
    """
    overrides = BuildOverrides(
        build_dir=build_dir, verbose=verbose, benchmark=benchmark, nodejs=nodejs
    )
    _configure_logging(overrides.verbose)

    try:
        project_dir = Path.cwd()
        site_config = load_site_config(project_dir)
        orchestrator = BuildOrchestrator(
            site_config=site_config,
            overrides=overrides,
            project_dir=project_dir,
        )
        ctx = orchestrator.build()
    except BuildError as e:
        click.secho(f"❌ Build failed:\n{e}", fg="red", err=True)
        raise click.Abort() from e
    except Exception as e:
        click.secho(INVALID_PROJECT_MESSAGE, fg="red", err=True)
        click.secho(f"Error: {e}\n", fg="red", err=True)
        raise click.Abort() from e

    click.secho(f"✅ Site built successfully: {ctx.build_path}", fg="green")


main = cli

if __name__ == "__main__":
    cli()
