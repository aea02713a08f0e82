"""
shelllab - An in-memory teaching shell

This package provides a small POSIX-like command interpreter running over a
virtual filesystem, along with a task matcher that notices when a learner's
command satisfies an exercise task.
"""

__version__ = "0.1.0"

from .filesystem import (
    FileSystem,
    FileNode,
    DirNode,
    Mode,
    Node,
    seed_paths,
)

from .paths import (
    resolve,
    join_path,
    parent_path,
)

from .session import (
    SessionState,
    HistoryEntry,
    LineKind,
)

from .tasks import (
    match_tasks,
    TaskProgress,
)

from .exercises import (
    Exercise,
    Example,
    ExerciseError,
)

from .terminal import (
    TerminalSession,
    TerminalConfig,
    CommandExecutor,
    CommandResult,
    Submission,
)

from .command_parser import (
    Command,
    CommandKind,
    CommandParser,
)

__all__ = [
    # Filesystem
    "FileSystem",
    "FileNode",
    "DirNode",
    "Mode",
    "Node",
    "seed_paths",

    # Paths
    "resolve",
    "join_path",
    "parent_path",

    # Session state
    "SessionState",
    "HistoryEntry",
    "LineKind",

    # Task matching
    "match_tasks",
    "TaskProgress",

    # Exercises
    "Exercise",
    "Example",
    "ExerciseError",

    # Terminal
    "TerminalSession",
    "TerminalConfig",
    "CommandExecutor",
    "CommandResult",
    "Submission",

    # Command parser
    "Command",
    "CommandKind",
    "CommandParser",

    # Version info
    "__version__",
]
