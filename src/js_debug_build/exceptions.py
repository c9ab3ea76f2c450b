"""Errors raised by the build pipeline."""

__all__ = [
    "BuildError",
    "ConfigError",
    "LocalizationError",
    "ProcessError",
    "TaskDefinitionError",
    "TaskError",
    "TaskNotFoundError",
]


class BuildError(Exception):
    """Base class for every error the pipeline reports to the user."""


class ConfigError(BuildError):
    """Configuration is missing or invalid."""


class TaskError(BuildError):
    """A task failed."""


class ProcessError(TaskError):
    """An external process exited with a non-zero code."""

    def __init__(self, name: str, exit_code: int) -> None:
        self.name = name
        self.exit_code = exit_code
        super().__init__(f"{name} exited with code {exit_code}")


class LocalizationError(TaskError):
    """The localization archive could not be fetched or parsed."""


class TaskNotFoundError(BuildError):
    """A task name was referenced that has not been defined."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Task never defined: {name}")


class TaskDefinitionError(BuildError):
    """A task name was registered twice."""
