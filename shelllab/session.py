"""
Session state for one terminal: the working directory and the scrollback.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List

from .paths import HOME_DIR

logger = logging.getLogger(__name__)


class LineKind(Enum):
    """How a scrollback line should be rendered."""
    COMMAND = 'command'
    OUTPUT = 'output'
    ERROR = 'error'


@dataclass
class HistoryEntry:
    """One rendered line (or block) of scrollback."""
    kind: LineKind
    text: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class SessionState:
    """
    Mutable state a dispatch may read or write.

    ``current_directory`` only changes through a successful ``cd``;
    ``history`` only grows, except for ``clear``.
    """
    current_directory: str = HOME_DIR
    history: List[HistoryEntry] = field(default_factory=list)

    def change_directory(self, path: str) -> None:
        logger.debug("cwd %s -> %s", self.current_directory, path)
        self.current_directory = path

    def record(self, kind: LineKind, text: str) -> HistoryEntry:
        """Append a line to the scrollback."""
        entry = HistoryEntry(kind=kind, text=text)
        self.history.append(entry)
        return entry

    def clear(self) -> None:
        """Forget the whole scrollback."""
        self.history = []

    def lines(self) -> List[str]:
        """Scrollback text in order."""
        return [entry.text for entry in self.history]
