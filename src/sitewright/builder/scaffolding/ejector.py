"""Writing, copying and cleaning up the ejectable core files."""

import importlib.resources
from importlib.resources.abc import Traversable
from pathlib import Path
import shutil

from pyvider.telemetry import logger

from ..exceptions import CleanupError, EjectError

EJECTED_DIR = Path("layouts") / "ejected"
SPA_EJECTED_DIR = Path("spa") / "ejected"

# Ejected files with these suffixes are served to the browser as they are.
NON_COMPILED_SUFFIXES = (".js",)


def _ejectable_files() -> list[Traversable]:
    root = importlib.resources.files("sitewright.builder.scaffolding").joinpath(
        "ejectable"
    )
    if not root.is_dir():
        raise EjectError("The bundled ejectable core files could not be found.")
    return sorted(
        (item for item in root.iterdir() if item.is_file()), key=lambda t: t.name
    )


def eject_temp(workspace: Path) -> tuple[list[Path], Path]:
    """
    Writes the core files into `<workspace>/layouts/ejected`, skipping any the
    user already has. Returns the paths created by this call, directories
    first, and the ejected root.
    """
    ejected_path = workspace / EJECTED_DIR
    missing_dirs = [d for d in (ejected_path.parent, ejected_path) if not d.exists()]
    created: list[Path] = []
    try:
        for item in _ejectable_files():
            target = ejected_path / item.name
            if target.exists():
                logger.debug(f"Keeping ejected file '{target}'")
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(item.read_bytes())
            created.append(target)
        created[:0] = [d for d in missing_dirs if d.is_dir()]
    except OSError as e:
        raise EjectError(f"Could not write ejectable core files: {e}") from e

    logger.info(
        f"Ejected core files to '{ejected_path}'",
        created=[str(p) for p in created],
    )
    return created, ejected_path


def eject_copy(build_path: Path, workspace: Path, ejected_path: Path) -> None:
    """Copies ejected files that need no compilation into `<build>/spa/ejected`."""
    dest_dir = build_path / SPA_EJECTED_DIR
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        for source in sorted(ejected_path.rglob("*")):
            if not source.is_file() or source.suffix not in NON_COMPILED_SUFFIXES:
                continue
            dest = dest_dir / source.relative_to(ejected_path)
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, dest)
            logger.debug(f"Copied ejected '{source.name}' to '{dest}'")
    except OSError as e:
        raise EjectError(f"Could not copy ejected files to '{dest_dir}': {e}") from e


def _remove_if_empty(directory: Path) -> None:
    if directory.is_dir() and not any(directory.iterdir()):
        directory.rmdir()


def eject_clean(temp_files: list[Path] | tuple[Path, ...], ejected_path: Path) -> None:
    """
    Deletes the paths created by `eject_temp` during this run, directories
    only once empty. Anything the user had before was never recorded and is
    left alone.
    """
    try:
        for path in reversed(temp_files):
            if path.is_dir() and not path.is_symlink():
                _remove_if_empty(path)
            elif path.exists() or path.is_symlink():
                path.unlink()
    except OSError as e:
        raise CleanupError(
            f"Could not clean up ejected files in '{ejected_path}': {e}"
        ) from e
    logger.info(f"Removed temporary core files from '{ejected_path}'")
