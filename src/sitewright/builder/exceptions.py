class BuildError(Exception):
    pass


class ConfigError(BuildError):
    pass


class StageError(BuildError):
    """A pipeline stage failed. Always fatal for the build."""

    stage = "build"

    def __init__(self, message: str, stage: str | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        return f"[{self.stage}] {super().__str__()}"


class ThemeError(StageError):
    stage = "themes"


class WorkspaceError(StageError):
    stage = "workspace"


class DependencyError(StageError):
    stage = "dependencies"


class EjectError(StageError):
    stage = "eject"


class AssetError(StageError):
    stage = "assets"


class ClientBuildError(StageError):
    stage = "client"


class DataSourceError(StageError):
    stage = "data_source"


class ExternalRuntimeError(StageError):
    stage = "nodejs"


class CleanupError(StageError):
    stage = "cleanup"
