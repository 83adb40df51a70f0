"""Build strategy that delegates rendering to the system's Node.js."""

from pathlib import Path
import shutil
import tempfile

import jinja2
from pyvider.telemetry import logger

from ..config import SiteConfig
from ..content import content_index, gather_content
from ..exceptions import ExternalRuntimeError
from ..runner import run_subprocess
from .native import PAGE_SHELLS

_TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


def _get_template_env() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(_TEMPLATE_DIR),
        keep_trailing_newline=True,
    )


def node_client(build_path: Path) -> str:
    """Renders the script that publishes layouts for the client."""
    template = _get_template_env().get_template("client_build.js.j2")
    return template.render(build_path=str(build_path.resolve()))


def node_data_source(
    build_path: Path, site_config: SiteConfig, workspace: Path = Path(".")
) -> tuple[str, str]:
    """Renders the static page script and the content index it consumes."""
    all_nodes = content_index(gather_content(workspace, site_config))
    template = _get_template_env().get_template("static_build.js.j2")
    script = template.render(
        build_path=str(build_path.resolve()),
        base_path=site_config.base_path,
        page_shells=list(PAGE_SHELLS),
    )
    return script, all_nodes


def node_exec(
    client_build_str: str,
    static_build_str: str,
    all_nodes_str: str,
    cwd: Path | None = None,
) -> None:
    """Writes the generated scripts to a scratch directory and runs them with node."""
    node = shutil.which("node")
    if not node:
        raise ExternalRuntimeError(
            "Node.js not found in PATH. Install it or build without --nodejs."
        )

    # Inside the workspace so node resolves imports from its node_modules.
    with tempfile.TemporaryDirectory(
        prefix=".sitewright_node_", dir=cwd
    ) as temp_dir_str:
        temp_dir = Path(temp_dir_str)
        client_script = temp_dir / "build_client.mjs"
        static_script = temp_dir / "build_static.mjs"
        nodes_file = temp_dir / "content.json"
        client_script.write_text(client_build_str)
        static_script.write_text(static_build_str)
        nodes_file.write_text(all_nodes_str)

        logger.info("Building the client with Node.js")
        run_subprocess(
            [node, str(client_script)], cwd=cwd, error_cls=ExternalRuntimeError
        )
        logger.info("Rendering static pages with Node.js")
        run_subprocess(
            [node, str(static_script), str(nodes_file)],
            cwd=cwd,
            error_cls=ExternalRuntimeError,
        )
