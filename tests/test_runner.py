"""Tests for the subprocess wrapper."""

import sys

import pytest

from sitewright.builder.exceptions import DependencyError, StageError
from sitewright.builder.runner import run_subprocess


def test_run_subprocess_returns_stdout() -> None:
    assert run_subprocess([sys.executable, "-c", "print('ok')"]) == "ok"


def test_run_subprocess_failure_raises_given_error() -> None:
    with pytest.raises(DependencyError) as exc_info:
        run_subprocess(
            [sys.executable, "-c", "import sys; sys.exit('broken')"],
            error_cls=DependencyError,
        )
    message = str(exc_info.value)
    assert "exit code 1" in message
    assert "broken" in message


def test_run_subprocess_missing_executable() -> None:
    with pytest.raises(StageError, match="Could not start"):
        run_subprocess(["/definitely/not/a/real/binary"])
