"""
Task-completion matching.

A task counts as done as soon as any word of its description shows up
inside a typed command line. This is a deliberately loose heuristic: common
words such as "a" or "the" will match almost anything.
"""

import logging
from typing import Iterable, List, Sequence, Set

logger = logging.getLogger(__name__)

# Quotes and sentence punctuation. Hyphens stay so that "-l" is kept whole.
WORD_EDGES = "'\"`.,;:!?()"


def task_keywords(description: str) -> List[str]:
    """Lower-cased whitespace-separated words with surrounding quotes and punctuation removed."""
    keywords = []
    for word in description.lower().split():
        word = word.strip(WORD_EDGES)
        # An empty keyword would match every input.
        if word:
            keywords.append(word)
    return keywords


def match_tasks(raw_input: str, tasks: Sequence[str],
                already_done: Iterable[int] = ()) -> List[int]:
    """
    Return the indices of tasks that ``raw_input`` newly completes.

    Tasks are checked in definition order; indices in ``already_done`` are
    never reported again.
    """
    done = set(already_done)
    command = raw_input.lower()
    completed = []
    for index, description in enumerate(tasks):
        if index in done:
            continue
        if any(keyword in command for keyword in task_keywords(description)):
            completed.append(index)
    return completed


class TaskProgress:
    """Tracks which tasks of an exercise have been completed."""

    def __init__(self, tasks: Sequence[str]):
        self.tasks = list(tasks)
        self.completed: Set[int] = set()

    def update(self, raw_input: str) -> List[int]:
        """Match a command line and record anything it completes."""
        newly = match_tasks(raw_input, self.tasks, self.completed)
        for index in newly:
            logger.debug("task %d completed by %r", index, raw_input)
        self.completed.update(newly)
        return newly

    def is_done(self, index: int) -> bool:
        return index in self.completed

    @property
    def all_done(self) -> bool:
        return bool(self.tasks) and len(self.completed) == len(self.tasks)

    @property
    def fraction(self) -> float:
        if not self.tasks:
            return 0.0
        return len(self.completed) / len(self.tasks)

    def summary(self) -> str:
        return f"{len(self.completed)} / {len(self.tasks)} completed"

    def reset(self) -> None:
        self.completed = set()
