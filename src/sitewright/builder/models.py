"""Values threaded through a single build run."""

from enum import Enum
from pathlib import Path

from attrs import define, field


class BuildStrategy(Enum):
    NATIVE = "native"
    EXTERNAL = "nodejs"


@define(frozen=True, slots=True)
class BuildOverrides:
    """Command-line flags, captured once per invocation."""

    build_dir: str = ""
    verbose: bool = False
    benchmark: bool = False
    nodejs: bool = False

    @property
    def strategy(self) -> BuildStrategy:
        return BuildStrategy.EXTERNAL if self.nodejs else BuildStrategy.NATIVE


@define(frozen=True, slots=True)
class BuildContext:
    """
    State accumulated stage by stage. Stages never mutate a context; they
    return an updated copy via `attrs.evolve`.

    `temp_build_dir` stays an empty string unless a theme was composed, and
    that sentinel alone decides which cleanup branch runs.
    """

    project_dir: Path
    build_dir: str = ""
    build_path: Path | None = None
    temp_build_dir: str = ""
    ejected_path: Path | None = None
    temp_files: tuple[Path, ...] = field(default=(), converter=tuple)
    strategy: BuildStrategy = BuildStrategy.NATIVE

    @property
    def uses_theme(self) -> bool:
        return self.temp_build_dir != ""

    @property
    def workspace(self) -> Path:
        """The theme-merged workspace when a theme is in use, else the project."""
        if self.uses_theme:
            return Path(self.temp_build_dir)
        return self.project_dir
