"""Branch scheduling, executors and the solve event log."""

from .executor import Executor, ProcessExecutor, SequentialExecutor
from .scheduler import Scheduler
from .task import BranchResult, BranchTask
from . import log

__all__ = [
    "BranchResult",
    "BranchTask",
    "Executor",
    "ProcessExecutor",
    "Scheduler",
    "SequentialExecutor",
    "log",
]
