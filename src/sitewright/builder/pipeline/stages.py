"""
Build stages. Each takes the current `BuildContext` plus the collaborators it
needs and returns the updated context, so any stage can run on its own against
a synthetic context.
"""

from collections.abc import Callable
from pathlib import Path

from attrs import define, evolve, field
from pyvider.telemetry import logger

from .. import assets, bundler, dependencies, themes, workspace
from ..config import SiteConfig, resolve_build_dir
from ..models import BuildContext, BuildOverrides, BuildStrategy
from ..scaffolding import ejector
from ..strategies import external, native


@define(frozen=True, slots=True)
class Collaborators:
    """The filesystem and compiler operations the stages delegate to."""

    themes_copy: Callable = field(default=themes.themes_copy)
    themes_merge: Callable = field(default=themes.themes_merge)
    themes_clean: Callable = field(default=themes.themes_clean)
    prepare_build_dir: Callable = field(default=workspace.prepare_build_dir)
    npm_defaults: Callable = field(default=dependencies.npm_defaults)
    eject_temp: Callable = field(default=ejector.eject_temp)
    eject_copy: Callable = field(default=ejector.eject_copy)
    eject_clean: Callable = field(default=ejector.eject_clean)
    assets_copy: Callable = field(default=assets.assets_copy)
    node_client: Callable = field(default=external.node_client)
    node_data_source: Callable = field(default=external.node_data_source)
    node_exec: Callable = field(default=external.node_exec)
    client_build: Callable = field(default=native.client_build)
    data_source: Callable = field(default=native.data_source)
    bundle: Callable = field(default=bundler.bundle)


def resolve_config(
    ctx: BuildContext, site_config: SiteConfig, overrides: BuildOverrides
) -> BuildContext:
    build_dir = resolve_build_dir(site_config, overrides)
    return evolve(
        ctx,
        build_dir=build_dir,
        build_path=ctx.project_dir / build_dir,
        strategy=overrides.strategy,
    )


def compose_theme(
    ctx: BuildContext, site_config: SiteConfig, c: Collaborators
) -> BuildContext:
    theme = site_config.theme
    if not theme:
        return ctx

    theme_path = ctx.project_dir / "themes" / theme
    temp_build_dir = c.themes_copy(theme_path, site_config.theme_options(theme))
    ctx = evolve(ctx, temp_build_dir=str(temp_build_dir))
    c.themes_merge(ctx.temp_build_dir, ctx.build_dir, ctx.project_dir)
    return ctx


def prepare_workspace(ctx: BuildContext, c: Collaborators) -> BuildContext:
    c.prepare_build_dir(ctx.build_path, ctx.project_dir)
    return ctx


def prime_dependencies(ctx: BuildContext, c: Collaborators) -> BuildContext:
    c.npm_defaults(ctx.workspace)
    return ctx


def eject_scaffold(ctx: BuildContext, c: Collaborators) -> BuildContext:
    temp_files, ejected_path = c.eject_temp(ctx.workspace)
    ctx = evolve(ctx, temp_files=temp_files, ejected_path=ejected_path)
    c.eject_copy(ctx.build_path, ctx.workspace, ejected_path)
    return ctx


def stage_assets(ctx: BuildContext, c: Collaborators) -> BuildContext:
    c.assets_copy(ctx.build_path, ctx.workspace)
    return ctx


def run_strategy(
    ctx: BuildContext, site_config: SiteConfig, c: Collaborators
) -> BuildContext:
    logger.info(f"Building with the {ctx.strategy.value} strategy")
    if ctx.strategy is BuildStrategy.EXTERNAL:
        client_build_str = c.node_client(ctx.build_path)
        static_build_str, all_nodes_str = c.node_data_source(
            ctx.build_path, site_config, ctx.workspace
        )
        c.node_exec(client_build_str, static_build_str, all_nodes_str, cwd=ctx.workspace)
    else:
        c.client_build(ctx.build_path, ctx.workspace, ctx.ejected_path)
        c.data_source(ctx.build_path, site_config, ctx.workspace)
    return ctx


def bundle_modules(ctx: BuildContext, c: Collaborators) -> BuildContext:
    c.bundle(ctx.build_path, ctx.workspace / "node_modules")
    return ctx


def cleanup(ctx: BuildContext, c: Collaborators) -> BuildContext:
    """
    Removes the theme workspace when one was used. Otherwise removes only the
    core files ejected by this run. Never both.
    """
    if ctx.uses_theme:
        c.themes_clean(ctx.temp_build_dir)
    else:
        c.eject_clean(list(ctx.temp_files), ctx.ejected_path or _ejected_root(ctx))
    return ctx


def _ejected_root(ctx: BuildContext) -> Path:
    return ctx.workspace / ejector.EJECTED_DIR
