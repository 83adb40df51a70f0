"""Tests for site configuration loading and build directory resolution."""

from pathlib import Path

import pytest

from sitewright.builder.config import (
    SiteConfig,
    ThemeOptions,
    load_site_config,
    resolve_build_dir,
)
from sitewright.builder.exceptions import ConfigError
from sitewright.builder.models import BuildOverrides, BuildStrategy


def test_load_site_config_reads_all_fields(tmp_path: Path) -> None:
    (tmp_path / "sitewright.toml").write_text(
        """
build_dir = "dist"
theme = "mytheme"
base_path = "/docs/"

[routes]
pages = "/:filename"

[theme_config.mytheme]
url = "https://example.com/mytheme.git"
commit = "abc123"
exclude = ["content/*", "*.md"]
"""
    )
    config = load_site_config(tmp_path)

    assert config.build_dir == "dist"
    assert config.theme == "mytheme"
    assert config.base_path == "/docs/"
    assert config.routes == {"pages": "/:filename"}
    assert config.theme_options("mytheme") == ThemeOptions(
        url="https://example.com/mytheme.git",
        commit="abc123",
        exclude=("content/*", "*.md"),
    )


def test_load_site_config_missing_file_uses_defaults(tmp_path: Path) -> None:
    config = load_site_config(tmp_path)
    assert config == SiteConfig()
    assert config.build_dir == "public"
    assert config.theme == ""


def test_load_site_config_malformed_file_is_an_error(tmp_path: Path) -> None:
    (tmp_path / "sitewright.toml").write_text("build_dir = \n")
    with pytest.raises(ConfigError, match="Could not read"):
        load_site_config(tmp_path)


def test_theme_options_default_for_unknown_theme() -> None:
    assert SiteConfig(theme="other").theme_options("other") == ThemeOptions()


def test_resolve_build_dir_uses_persisted_value_without_override() -> None:
    config = SiteConfig(build_dir="public", theme="")
    assert resolve_build_dir(config, BuildOverrides(build_dir="")) == "public"


def test_resolve_build_dir_override_replaces_persisted_value() -> None:
    config = SiteConfig(build_dir="public")
    assert resolve_build_dir(config, BuildOverrides(build_dir="out")) == "out"


@pytest.mark.parametrize("persisted", ["public", "", "nested/site", "build"])
@pytest.mark.parametrize("override", ["out", "public", "a/b"])
def test_non_empty_override_always_wins(persisted: str, override: str) -> None:
    config = SiteConfig(build_dir=persisted)
    assert resolve_build_dir(config, BuildOverrides(build_dir=override)) == override


def test_overrides_select_strategy() -> None:
    assert BuildOverrides().strategy is BuildStrategy.NATIVE
    assert BuildOverrides(nodejs=True).strategy is BuildStrategy.EXTERNAL
