"""Pytest fixtures for the entire sitewright-builder test suite."""

import json
from pathlib import Path
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from sitewright.builder.pipeline.stages import Collaborators

PAGE_LAYOUT = "<article><h1>{{ content.title }}</h1>{{ content.body }}</article>\n"
INDEX_LAYOUT = "<section>{% for node in all_content %}<a href=\"{{ node.path }}\">{{ node.path }}</a>{% endfor %}</section>\n"


def _write_tree(root: Path, files: dict[str, str]) -> None:
    for rel_path, text in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)


@pytest.fixture
def write_tree() -> Callable[[Path, dict[str, str]], None]:
    """Writes a `{relative path: text}` mapping under a root directory."""
    return _write_tree


@pytest.fixture(autouse=True)
def no_npm(monkeypatch: MonkeyPatch) -> None:
    """Keeps the test suite from ever running a real `npm install`."""
    monkeypatch.setattr(
        "sitewright.builder.dependencies.shutil.which", lambda name: None
    )


@pytest.fixture
def make_site_project() -> Callable[..., Path]:
    """A factory fixture that lays out a small, buildable site project."""

    def _make(root_dir: Path, config: str = 'build_dir = "public"\n', **extra: str) -> Path:
        files = {
            "sitewright.toml": config,
            "content/index.json": json.dumps({"title": "Home"}),
            "content/pages/about.json": json.dumps(
                {"title": "About", "body": "About us"}
            ),
            "content/pages/_draft.json": json.dumps({"title": "Draft"}),
            "layouts/content/index.html": INDEX_LAYOUT,
            "layouts/content/pages.html": PAGE_LAYOUT,
            "assets/css/site.css": "body { margin: 0; }\n",
        }
        files.update(extra)
        _write_tree(root_dir, files)
        (root_dir / "node_modules").mkdir(exist_ok=True)
        return root_dir

    return _make


@pytest.fixture
def mock_collaborators(tmp_path: Path) -> tuple[Collaborators, MagicMock]:
    """
    Collaborators backed by a single parent mock, so tests can assert on the
    order of calls across collaborators via `parent.mock_calls`.
    """
    parent = MagicMock()
    parent.themes_copy.return_value = tmp_path / "theme-workspace"
    parent.eject_temp.return_value = (
        [tmp_path / "layouts/ejected/main.js"],
        tmp_path / "layouts/ejected",
    )
    parent.node_client.return_value = "client-script"
    parent.node_data_source.return_value = ("static-script", "[]")

    names = [
        "themes_copy", "themes_merge", "themes_clean", "prepare_build_dir",
        "npm_defaults", "eject_temp", "eject_copy", "eject_clean", "assets_copy",
        "node_client", "node_data_source", "node_exec", "client_build",
        "data_source", "bundle",
    ]
    kwargs: dict[str, Any] = {name: getattr(parent, name) for name in names}
    return Collaborators(**kwargs), parent
