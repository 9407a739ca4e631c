"""Dependency resolution: the update traversal and lock file restore."""

from repolock.core.resolution.engine import DependencyResolver, UpdateResult, VisitCallback
from repolock.core.resolution.reporter import LoggingReporter, RecordingReporter, Reporter
from repolock.core.resolution.restore import (
    RestoreAction,
    RestoreOutcome,
    RestoreResult,
    decide_restore_action,
)
from repolock.core.resolution.state import TraversalState

__all__ = [
    "DependencyResolver",
    "LoggingReporter",
    "RecordingReporter",
    "Reporter",
    "RestoreAction",
    "RestoreOutcome",
    "RestoreResult",
    "TraversalState",
    "UpdateResult",
    "VisitCallback",
    "decide_restore_action",
]
