"""In-process build strategy: Jinja2 layouts rendered directly by Python."""

import json
from pathlib import Path
import shutil

import jinja2
from markupsafe import Markup
from pyvider.telemetry import logger

from ..config import SiteConfig
from ..content import content_index, gather_content
from ..exceptions import ClientBuildError, DataSourceError

LAYOUTS_DIR = "layouts"
SPA_DIR = Path("spa")
GENERATED_DIR = SPA_DIR / "generated"
PAGE_SHELLS = ("global/html.html", "ejected/html.html")


def _layout_env(workspace: Path) -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(workspace / LAYOUTS_DIR),
        autoescape=jinja2.select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _write_module(path: Path, value: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"export default {json.dumps(value, indent=2)};\n")


def _layout_sources(layouts_root: Path, ejected_path: Path) -> list[tuple[str, Path]]:
    sources: dict[str, Path] = {}
    if ejected_path.is_dir() and not ejected_path.is_relative_to(layouts_root):
        for source in ejected_path.rglob("*.html"):
            sources["ejected/" + source.relative_to(ejected_path).as_posix()] = source
    if layouts_root.is_dir():
        for source in layouts_root.rglob("*.html"):
            sources[source.relative_to(layouts_root).as_posix()] = source
    return sorted(sources.items())


def client_build(build_path: Path, workspace: Path, ejected_path: Path) -> None:
    """
    Compiles every layout and publishes it for the client router under
    `<build>/spa/layouts`, together with a registry module for the router.
    """
    layouts_root = workspace / LAYOUTS_DIR
    env = _layout_env(workspace)
    registry: dict[str, str] = {}

    sources = _layout_sources(layouts_root, ejected_path)
    for name, source in sources:
        try:
            env.parse(source.read_text(encoding="utf-8"), name, str(source))
        except jinja2.TemplateSyntaxError as e:
            raise ClientBuildError(
                f"Syntax error in layout '{name}' line {e.lineno}: {e.message}"
            ) from e
        dest = build_path / SPA_DIR / LAYOUTS_DIR / name
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, dest)
        registry[name] = name

    _write_module(build_path / GENERATED_DIR / "layouts.js", registry)
    logger.info(f"Compiled {len(registry)} layout(s) for the client")


def _page_shell(env: jinja2.Environment) -> jinja2.Template:
    try:
        return env.select_template(PAGE_SHELLS)
    except jinja2.TemplatesNotFound as e:
        raise DataSourceError(
            "No page shell found; expected one of " + ", ".join(PAGE_SHELLS)
        ) from e


def data_source(build_path: Path, site_config: SiteConfig, workspace: Path) -> None:
    """Turns `content/` into a JSON module and a static HTML page per node."""
    nodes = gather_content(workspace, site_config)
    all_content = json.loads(content_index(nodes))
    _write_module(build_path / GENERATED_DIR / "content.js", all_content)
    _write_module(
        build_path / GENERATED_DIR / "config.js", {"basePath": site_config.base_path}
    )

    env = _layout_env(workspace)
    shell = _page_shell(env)
    for node, node_data in zip(nodes, all_content):
        try:
            template = env.get_template(f"content/{node.type}.html")
            context = {
                "node": node_data,
                "content": node.fields,
                "all_content": all_content,
                "base_path": site_config.base_path,
            }
            body = template.render(**context)
            html = shell.render(body=Markup(body), **context)
        except jinja2.TemplateNotFound as e:
            raise DataSourceError(
                f"No layout for content type '{node.type}': missing '{e.name}'"
            ) from e
        except jinja2.TemplateError as e:
            raise DataSourceError(f"Could not render '{node.path}': {e}") from e

        dest = build_path / node.path.lstrip("/") / "index.html"
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(html, encoding="utf-8")
        logger.debug(f"Rendered '{node.path}'", template=template.name)

    logger.info(f"Rendered {len(nodes)} page(s) from content")
