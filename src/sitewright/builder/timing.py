"""Per-stage build timings for `--benchmark`."""

from collections.abc import Iterator
from contextlib import contextmanager
import time

import click
from attrs import define, field


@define(slots=True)
class Stopwatch:
    enabled: bool = False
    timings: list[tuple[str, float]] = field(factory=list)

    @contextmanager
    def measure(self, label: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - start
            self.timings.append((label, elapsed))
            if self.enabled:
                click.secho(f"⏱  {label} took {elapsed:.3f}s", fg="cyan")

    @property
    def total(self) -> float:
        return sum(elapsed for _, elapsed in self.timings)

    def report_total(self) -> None:
        if self.enabled:
            click.secho(f"⏱  Total build took {self.total:.3f}s", fg="cyan", bold=True)
