"""Baseline client dependencies for a workspace."""

from pathlib import Path
import shutil

import jinja2
from pyvider.telemetry import logger

from .exceptions import DependencyError
from .runner import run_subprocess

_TEMPLATE_DIR = Path(__file__).parent / "templates"

DEFAULT_DEPENDENCIES = {
    "nunjucks": "^3.2.4",
}


def _get_template_env() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(_TEMPLATE_DIR),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def npm_defaults(workspace: Path) -> None:
    """
    Makes sure `workspace` has a package.json and installed node_modules.

    Nothing is overwritten: an existing package.json or node_modules directory
    is left exactly as the user has it.
    """
    package_json = workspace / "package.json"
    if not package_json.exists():
        logger.info(f"Writing default '{package_json}'")
        template = _get_template_env().get_template("package.json.j2")
        content = template.render(
            name=workspace.resolve().name.lower().replace(" ", "-"),
            dependencies=DEFAULT_DEPENDENCIES
        )
        try:
            package_json.write_text(content)
        except OSError as e:
            raise DependencyError(f"Could not write '{package_json}': {e}") from e

    if (workspace / "node_modules").is_dir():
        return

    npm = shutil.which("npm")
    if not npm:
        logger.warning(
            "npm not found in PATH; client dependencies were not installed",
            workspace=str(workspace),
        )
        return

    run_subprocess(
        [npm, "install", "--no-audit", "--no-fund"],
        cwd=workspace,
        error_cls=DependencyError,
    )
