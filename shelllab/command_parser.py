#!/usr/bin/env python3
"""
Command parser for the shelllab terminal.

This module translates one line of input into a structured ``Command`` that
the executor can dispatch on.

Design Principles:
- Single responsibility: Parse commands, don't execute them
- Closed vocabulary: every recognised name maps to a ``CommandKind``
- Testable: Pure functions with predictable outputs
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple


class CommandKind(Enum):
    """Every command the shell understands."""
    HELP = 'help'
    LS = 'ls'
    PWD = 'pwd'
    CD = 'cd'
    MKDIR = 'mkdir'
    TOUCH = 'touch'
    CAT = 'cat'
    ECHO = 'echo'
    GREP = 'grep'
    PS = 'ps'
    WHOAMI = 'whoami'
    CLEAR = 'clear'
    RM = 'rm'
    CP = 'cp'
    MV = 'mv'
    UNKNOWN = None

    @classmethod
    def from_name(cls, name: str) -> 'CommandKind':
        for kind in cls:
            if kind.value == name:
                return kind
        return cls.UNKNOWN


@dataclass
class Command:
    """
    Represents a single command with its arguments.

    ``args`` has flags removed for commands that take any; ``raw_args`` is
    always the untouched token list.
    """
    kind: CommandKind
    name: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, bool] = field(default_factory=dict)
    raw_args: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return ' '.join([self.name] + self.raw_args)

    def arg(self, index: int, default: str = '') -> str:
        """Positional argument or ``default`` when it is absent."""
        if index < len(self.args):
            return self.args[index]
        return default


class CommandParser:
    """
    Parser for the shell's input lines.

    Tokens are separated by whitespace; there is no quoting, escaping,
    piping or redirection. Only commands listed in ``FLAG_MAPPINGS`` have
    their dash-prefixed arguments interpreted as flags.
    """

    FLAG_MAPPINGS = {
        'ls': {
            'a': 'all',
            'l': 'long',
        },
        'rm': {
            'r': 'recursive',
            'R': 'recursive',
            'f': 'force',
        },
        'cp': {
            'r': 'recursive',
            'R': 'recursive',
        },
    }

    def parse(self, command_line: str) -> Command:
        """Parse a line into a Command; blank lines give an empty name."""
        tokens = command_line.split()
        if not tokens:
            return Command(kind=CommandKind.UNKNOWN, name='')

        cmd_name = tokens[0]
        raw_args = tokens[1:]

        if cmd_name in self.FLAG_MAPPINGS:
            flags, args = self._parse_flags(cmd_name, raw_args)
        else:
            flags, args = {}, list(raw_args)

        return Command(
            kind=CommandKind.from_name(cmd_name),
            name=cmd_name,
            args=args,
            flags=flags,
            raw_args=raw_args,
        )

    def _parse_flags(self, cmd_name: str, args: List[str]) -> Tuple[Dict[str, bool], List[str]]:
        """
        Parse flags from arguments.

        Returns (flags_dict, remaining_args). Short flags may be bundled
        (``-la``); unrecognised letters are ignored.
        """
        flags = {}
        remaining = []
        flag_mappings = self.FLAG_MAPPINGS[cmd_name]
        long_names = set(flag_mappings.values())

        for arg in args:
            if arg.startswith('--') and len(arg) > 2:
                if arg[2:] in long_names:
                    flags[arg[2:]] = True
            elif arg.startswith('-') and len(arg) > 1:
                for char in arg[1:]:
                    if char in flag_mappings:
                        flags[flag_mappings[char]] = True
            else:
                remaining.append(arg)

        return flags, remaining
