"""Discovery of content nodes under `content/`."""

import json
from pathlib import Path
from typing import Any

from attrs import asdict, define, field

from .config import SiteConfig
from .exceptions import DataSourceError

CONTENT_DIR = "content"


@define(frozen=True, slots=True)
class ContentNode:
    path: str
    type: str
    filename: str
    fields: dict[str, Any] = field(factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _route_for(rel_path: Path, node_type: str, site_config: SiteConfig) -> str:
    filename = rel_path.stem
    if node_type == "index":
        return "/"
    pattern = site_config.routes.get(node_type)
    if pattern:
        route = pattern.replace(":type", node_type).replace(":filename", filename)
        return "/" + route.strip("/")
    return "/" + rel_path.with_suffix("").as_posix()


def gather_content(workspace: Path, site_config: SiteConfig) -> list[ContentNode]:
    """
    Reads every `content/**/*.json` file into a node. Files and directories
    starting with an underscore are treated as drafts and skipped.
    """
    content_root = workspace / CONTENT_DIR
    if not content_root.is_dir():
        return []

    nodes = []
    for source in sorted(content_root.rglob("*.json")):
        rel_path = source.relative_to(content_root)
        if any(part.startswith("_") for part in rel_path.parts):
            continue
        node_type = rel_path.parts[0] if len(rel_path.parts) > 1 else rel_path.stem
        try:
            fields = json.loads(source.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise DataSourceError(f"Could not read content file '{source}': {e}") from e
        if not isinstance(fields, dict):
            raise DataSourceError(f"Content file '{source}' must hold a JSON object.")
        nodes.append(
            ContentNode(
                path=_route_for(rel_path, node_type, site_config),
                type=node_type,
                filename=source.name,
                fields=fields,
            )
        )
    return nodes


def content_index(nodes: list[ContentNode]) -> str:
    return json.dumps([node.to_dict() for node in nodes], indent=2)
