from pathlib import Path
import shutil

from pyvider.telemetry import logger

from .exceptions import AssetError

ASSETS_DIR = "assets"


def assets_copy(build_path: Path, workspace: Path) -> None:
    """Copies `assets/` verbatim into the build directory."""
    source = workspace / ASSETS_DIR
    if not source.is_dir():
        logger.debug(f"No '{ASSETS_DIR}' directory in '{workspace}', skipping")
        return

    logger.info(f"Copying static assets to '{build_path / ASSETS_DIR}'")
    try:
        shutil.copytree(source, build_path / ASSETS_DIR, dirs_exist_ok=True)
    except OSError as e:
        raise AssetError(f"Could not copy static assets: {e}") from e
