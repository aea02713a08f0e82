"""
Exercise descriptors.

An exercise is read-only input to a terminal session: a title, the commands
it teaches, worked examples, and the tasks whose completion is tracked.
Descriptors are usually kept as JSON, either one object or a list of them.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class ExerciseError(ValueError):
    """Raised when an exercise descriptor is malformed."""


@dataclass(frozen=True)
class Example:
    """A worked example shown next to the terminal."""
    command: str
    description: str = ''
    output: str = ''


@dataclass(frozen=True)
class Exercise:
    """One lesson's worth of commands, examples and tasks."""
    title: str
    commands: List[str] = field(default_factory=list)
    tasks: List[str] = field(default_factory=list)
    examples: List[Example] = field(default_factory=list)
    id: Optional[int] = None
    description: str = ''
    difficulty: str = ''
    category: str = ''
    estimated_time: str = ''
    theory: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Exercise':
        """Build an Exercise from a decoded JSON object."""
        if not isinstance(data, dict):
            raise ExerciseError(f"exercise must be an object, got {type(data).__name__}")
        title = data.get('title')
        if not isinstance(title, str) or not title:
            raise ExerciseError("exercise is missing a title")

        for key in ('commands', 'tasks', 'examples'):
            if not isinstance(data.get(key, []), list):
                raise ExerciseError(f"{title}: '{key}' must be a list")

        examples = []
        for raw in data.get('examples', []):
            if not isinstance(raw, dict) or not isinstance(raw.get('command'), str):
                raise ExerciseError(f"{title}: every example needs a 'command'")
            examples.append(Example(
                command=raw['command'],
                description=raw.get('description', ''),
                output=raw.get('output', ''),
            ))

        return cls(
            title=title,
            commands=[str(c) for c in data.get('commands', [])],
            tasks=[str(t) for t in data.get('tasks', [])],
            examples=examples,
            id=data.get('id'),
            description=data.get('description', ''),
            difficulty=data.get('difficulty', ''),
            category=data.get('category', ''),
            estimated_time=data.get('estimatedTime', data.get('estimated_time', '')),
            theory=data.get('theory', ''),
        )


PLAYGROUND = Exercise(title='Shell Playground')


def loads(text: str) -> List[Exercise]:
    """Parse one exercise object or a list of them from JSON text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExerciseError(f"invalid exercise JSON: {e}") from e
    if isinstance(data, list):
        return [Exercise.from_dict(item) for item in data]
    return [Exercise.from_dict(data)]


def load(path: str) -> List[Exercise]:
    """Read exercises from a JSON file on the host."""
    with open(path, 'r', encoding='utf-8') as f:
        return loads(f.read())
