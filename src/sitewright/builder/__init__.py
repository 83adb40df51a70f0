"""
This package contains the build pipeline for sitewright sites: it turns a
project, optionally layered on a theme, into a deployable static directory.
"""

from .config import SiteConfig, ThemeOptions, load_site_config
from .models import BuildContext, BuildOverrides, BuildStrategy
from .pipeline.orchestrator import BuildOrchestrator

__all__ = [
    "BuildContext",
    "BuildOrchestrator",
    "BuildOverrides",
    "BuildStrategy",
    "SiteConfig",
    "ThemeOptions",
    "load_site_config",
]
