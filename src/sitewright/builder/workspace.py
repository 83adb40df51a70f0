"""Preparation of a clean output directory."""

from pathlib import Path
import shutil

from pyvider.telemetry import logger

from .exceptions import WorkspaceError


def prepare_build_dir(build_path: Path, project_dir: Path) -> None:
    """Removes any previous build at `build_path` and recreates it empty."""
    resolved = build_path.resolve()
    project_root = project_dir.resolve()
    if resolved == project_root or resolved in project_root.parents:
        raise WorkspaceError(
            f"Refusing to use '{build_path}' as the build directory: "
            "it contains the project itself."
        )

    if build_path.exists():
        logger.info(f"Removing old '{build_path}' build directory")
        try:
            if build_path.is_dir() and not build_path.is_symlink():
                shutil.rmtree(build_path)
            else:
                build_path.unlink()
        except OSError as e:
            raise WorkspaceError(
                f"Unable to remove old build directory '{build_path}': {e}"
            ) from e

    try:
        build_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WorkspaceError(
            f"Unable to create '{build_path}' build directory: {e}"
        ) from e
    logger.info(f"Creating '{build_path}' build directory")
