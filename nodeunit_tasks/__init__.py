"""Task runner for building and installing nodeunit."""

__version__ = "0.1.0"
from .assembly import AssemblyPlan, BuildArtifact, FileFragment, LiteralFragment, assemble, render
from .config import RunnerConfig, load_config
from .errors import ExternalCommandError, MinificationError, MissingInputError, TaskError, UsageError
from .tasks import TaskContext, TaskSpec, get_task, list_tasks, run_task

__all__ = [
    "__version__",
    "AssemblyPlan",
    "BuildArtifact",
    "FileFragment",
    "LiteralFragment",
    "assemble",
    "render",
    "RunnerConfig",
    "load_config",
    "ExternalCommandError",
    "MinificationError",
    "MissingInputError",
    "TaskError",
    "UsageError",
    "TaskContext",
    "TaskSpec",
    "get_task",
    "list_tasks",
    "run_task",
]
