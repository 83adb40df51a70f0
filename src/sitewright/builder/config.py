"""Loading of `sitewright.toml` and resolution of the effective build directory."""

from pathlib import Path
import tomllib
from typing import Any

from attrs import define, field
from pyvider.telemetry import logger

from .exceptions import ConfigError
from .models import BuildOverrides

CONFIG_FILENAME = "sitewright.toml"
DEFAULT_BUILD_DIR = "public"


@define(frozen=True, slots=True)
class ThemeOptions:
    url: str = ""
    commit: str = ""
    exclude: tuple[str, ...] = field(default=(), converter=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ThemeOptions":
        return cls(
            url=data.get("url", ""),
            commit=data.get("commit", ""),
            exclude=data.get("exclude", []),
        )


@define(frozen=True, slots=True)
class SiteConfig:
    build_dir: str = DEFAULT_BUILD_DIR
    theme: str = ""
    theme_config: dict[str, ThemeOptions] = field(factory=dict)
    base_path: str = "/"
    routes: dict[str, str] = field(factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SiteConfig":
        theme_config = data.get("theme_config", {})
        if not isinstance(theme_config, dict):
            raise ConfigError("'theme_config' must be a table of theme names.")
        return cls(
            build_dir=data.get("build_dir", DEFAULT_BUILD_DIR),
            theme=data.get("theme", ""),
            theme_config={
                name: ThemeOptions.from_dict(opts)
                for name, opts in theme_config.items()
            },
            base_path=data.get("base_path", "/"),
            routes=dict(data.get("routes", {})),
        )

    def theme_options(self, theme: str) -> ThemeOptions:
        return self.theme_config.get(theme, ThemeOptions())


def load_site_config(project_dir: Path) -> SiteConfig:
    """
    Reads the persisted site configuration.

    A missing file falls back to defaults; a file that exists but cannot be
    parsed is an error.
    """
    config_path = project_dir / CONFIG_FILENAME
    if not config_path.is_file():
        logger.warning(
            f"No {CONFIG_FILENAME} found, using default settings",
            project_dir=str(project_dir),
        )
        return SiteConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Could not read '{config_path}': {e}") from e
    return SiteConfig.from_dict(data)


def resolve_build_dir(site_config: SiteConfig, overrides: BuildOverrides) -> str:
    """An explicit `--dir` always wins over the persisted value."""
    if overrides.build_dir:
        return overrides.build_dir
    return site_config.build_dir
