"""Tests for priming a workspace with its client dependencies."""

import json
from pathlib import Path
from unittest.mock import patch

from pytest import MonkeyPatch

from sitewright.builder.dependencies import DEFAULT_DEPENDENCIES, npm_defaults


def test_npm_defaults_writes_package_json(tmp_path: Path) -> None:
    workspace = tmp_path / "My Site"
    workspace.mkdir()

    npm_defaults(workspace)

    data = json.loads((workspace / "package.json").read_text())
    assert data["name"] == "my-site"
    assert data["type"] == "module"
    assert data["dependencies"] == DEFAULT_DEPENDENCIES


def test_npm_defaults_keeps_existing_package_json(tmp_path: Path) -> None:
    package_json = tmp_path / "package.json"
    package_json.write_text('{"dependencies": {"left-pad": "1.0.0"}}')

    npm_defaults(tmp_path)

    assert package_json.read_text() == '{"dependencies": {"left-pad": "1.0.0"}}'


def test_npm_defaults_installs_when_node_modules_missing(
    tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    monkeypatch.setattr(
        "sitewright.builder.dependencies.shutil.which", lambda name: "/usr/bin/npm"
    )
    with patch("sitewright.builder.dependencies.run_subprocess") as mock_run:
        npm_defaults(tmp_path)

    mock_run.assert_called_once()
    args, kwargs = mock_run.call_args
    assert args[0][:2] == ["/usr/bin/npm", "install"]
    assert kwargs["cwd"] == tmp_path


def test_npm_defaults_leaves_existing_node_modules_alone(
    tmp_path: Path, monkeypatch: MonkeyPatch
) -> None:
    (tmp_path / "node_modules").mkdir()
    monkeypatch.setattr(
        "sitewright.builder.dependencies.shutil.which", lambda name: "/usr/bin/npm"
    )
    with patch("sitewright.builder.dependencies.run_subprocess") as mock_run:
        npm_defaults(tmp_path)

    mock_run.assert_not_called()


def test_npm_defaults_without_npm_does_not_fail(tmp_path: Path) -> None:
    with patch("sitewright.builder.dependencies.run_subprocess") as mock_run:
        npm_defaults(tmp_path)
    mock_run.assert_not_called()
    assert not (tmp_path / "node_modules").exists()
