"""Theme composition: staging theme chains into a temporary workspace."""

from collections.abc import Callable, Iterable
import fnmatch
from pathlib import Path
import shutil
import tempfile

from pyvider.telemetry import logger

from .config import CONFIG_FILENAME, ThemeOptions, load_site_config
from .exceptions import CleanupError, ConfigError, ThemeError

# Top-level project entries never merged into a theme workspace.
MERGE_SKIP = [".git", "node_modules", "themes"]

NODE_MODULES = "node_modules"


def create_ignore_func(
    root: Path, patterns: list[str], root_names: Iterable[str] = ()
) -> Callable[[str, list[str]], Iterable[str]]:
    """
    Creates a function suitable for shutil.copytree's ignore argument.

    `patterns` match a root-relative path or a bare name at any depth.
    `root_names` are root-relative paths skipped only at that exact location.
    """
    anchored = {Path(name).as_posix() for name in root_names}

    def ignore(dir_path_str: str, names: list[str]) -> Iterable[str]:
        dir_path = Path(dir_path_str)
        ignored_names = set()
        for name in names:
            rel_path_str = (dir_path / name).relative_to(root).as_posix()
            if rel_path_str in anchored:
                ignored_names.add(name)
                continue
            for pattern in patterns:
                if fnmatch.fnmatch(rel_path_str, pattern) or fnmatch.fnmatch(
                    name, pattern
                ):
                    ignored_names.add(name)
                    break
        return ignored_names

    return ignore


def _copy_theme_chain(
    theme_path: Path, options: ThemeOptions, dest: Path, seen: set[Path]
) -> None:
    resolved = theme_path.resolve()
    if resolved in seen:
        raise ThemeError(f"Theme '{theme_path}' depends on itself.")
    seen.add(resolved)

    if not theme_path.is_dir():
        raise ThemeError(f"Theme directory not found: {theme_path}")

    # Themes nested in this theme go in first so this theme overrides them.
    if (theme_path / CONFIG_FILENAME).is_file():
        try:
            theme_config = load_site_config(theme_path)
        except ConfigError as e:
            raise ThemeError(str(e)) from e
        if theme_config.theme:
            logger.debug(
                f"Theme '{theme_path.name}' builds on '{theme_config.theme}'"
            )
            _copy_theme_chain(
                theme_path / "themes" / theme_config.theme,
                theme_config.theme_options(theme_config.theme),
                dest,
                seen,
            )

    shutil.copytree(
        theme_path,
        dest,
        ignore=create_ignore_func(theme_path, options.exclude, ["themes"]),
        dirs_exist_ok=True,
    )


def themes_copy(theme_path: Path, options: ThemeOptions) -> Path:
    """Stages a theme, and every theme it builds on, into a fresh temp dir."""
    logger.info(f"Copying theme '{theme_path}' to a temporary build directory")
    temp_dir = Path(tempfile.mkdtemp(prefix="sitewright_theme_"))
    try:
        _copy_theme_chain(theme_path, options, temp_dir, set())
    except ThemeError:
        shutil.rmtree(temp_dir, ignore_errors=True)
        raise
    except OSError as e:
        shutil.rmtree(temp_dir, ignore_errors=True)
        raise ThemeError(f"Could not copy theme '{theme_path}': {e}") from e
    return temp_dir


def _link_node_modules(installed: Path, target: Path) -> None:
    """Shares the project's installed packages with the theme workspace."""
    if not installed.is_dir() or target.exists() or target.is_symlink():
        return
    try:
        target.symlink_to(installed.resolve(), target_is_directory=True)
    except OSError:
        shutil.copytree(installed, target, symlinks=True)
    logger.debug(f"Linked '{installed}' into the theme workspace")


def themes_merge(temp_build_dir: str, build_dir: str, project_dir: Path) -> None:
    """Copies the project over the staged theme. Project files win."""
    logger.info(f"Merging project files into '{temp_build_dir}'")
    workspace = Path(temp_build_dir)
    try:
        shutil.copytree(
            project_dir,
            workspace,
            ignore=create_ignore_func(project_dir, [], [*MERGE_SKIP, build_dir]),
            dirs_exist_ok=True,
        )
        _link_node_modules(project_dir / NODE_MODULES, workspace / NODE_MODULES)
    except OSError as e:
        raise ThemeError(f"Could not merge project into theme: {e}") from e


def themes_clean(temp_build_dir: str) -> None:
    logger.info(f"Removing temporary theme workspace '{temp_build_dir}'")
    try:
        shutil.rmtree(temp_build_dir)
    except OSError as e:
        raise CleanupError(
            f"Could not remove theme workspace '{temp_build_dir}': {e}"
        ) from e
