"""Runs the build stages in order and stops at the first failure."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from pyvider.telemetry import logger

from ..config import SiteConfig
from ..exceptions import StageError
from ..models import BuildContext, BuildOverrides
from ..timing import Stopwatch
from . import stages
from .stages import Collaborators


class BuildOrchestrator:
    def __init__(
        self,
        site_config: SiteConfig,
        overrides: BuildOverrides,
        project_dir: Path,
        collaborators: Collaborators | None = None,
        stopwatch: Stopwatch | None = None,
    ) -> None:
        self.site_config = site_config
        self.overrides = overrides
        self.project_dir = project_dir
        self.collaborators = collaborators or Collaborators()
        self.stopwatch = stopwatch or Stopwatch(enabled=overrides.benchmark)

    @contextmanager
    def _stage(self, name: str) -> Iterator[None]:
        logger.debug(f"Stage '{name}' starting")
        with self.stopwatch.measure(name):
            try:
                yield
            except OSError as e:
                raise StageError(str(e), stage=name) from e

    def _run(
        self, name: str, stage: Callable[..., BuildContext], ctx: BuildContext, *args: Any
    ) -> BuildContext:
        with self._stage(name):
            return stage(ctx, *args)

    def build(self) -> BuildContext:
        """
        Runs every stage once. Any `BuildError` propagates unchanged and leaves
        whatever was already written in place.
        """
        logger.info("Orchestrator starting site build...")
        c = self.collaborators
        ctx = BuildContext(project_dir=self.project_dir)

        ctx = self._run(
            "config", stages.resolve_config, ctx, self.site_config, self.overrides
        )
        ctx = self._run("themes", stages.compose_theme, ctx, self.site_config, c)
        ctx = self._run("workspace", stages.prepare_workspace, ctx, c)
        ctx = self._run("dependencies", stages.prime_dependencies, ctx, c)
        ctx = self._run("eject", stages.eject_scaffold, ctx, c)
        ctx = self._run("assets", stages.stage_assets, ctx, c)
        ctx = self._run(ctx.strategy.value, stages.run_strategy, ctx, self.site_config, c)
        ctx = self._run("bundle", stages.bundle_modules, ctx, c)
        ctx = self._run("cleanup", stages.cleanup, ctx, c)

        self.stopwatch.report_total()
        logger.info(f"Site built to '{ctx.build_path}'")
        return ctx
