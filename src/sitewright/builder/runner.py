"""Thin subprocess wrapper shared by the npm and Node.js integrations."""

from pathlib import Path
import subprocess

from pyvider.telemetry import logger

from .exceptions import StageError


def run_subprocess(
    command: list[str],
    cwd: Path | str | None = None,
    error_cls: type[StageError] = StageError,
) -> str:
    logger.info(f"Running command: {' '.join(command)}")
    try:
        result = subprocess.run(
            command, capture_output=True, text=True, cwd=cwd, check=False
        )
    except OSError as e:
        raise error_cls(f"Could not start '{command[0]}': {e}") from e

    if result.returncode != 0:
        error_message = (
            f"Command failed with exit code {result.returncode}.\n"
            f"  Command: {' '.join(command)}\n"
            f"  Stdout:\n{result.stdout.strip()}\n"
            f"  Stderr:\n{result.stderr.strip()}"
        )
        raise error_cls(error_message)
    if result.stderr:
        logger.debug("Command stderr", output=result.stderr.strip())
    return result.stdout.strip()
