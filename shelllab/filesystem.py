#!/usr/bin/env python3
"""
shelllab filesystem - the in-memory tree behind the teaching shell.

Core philosophy:
- Every node lives in a flat map keyed by its canonical absolute path
- Directories only know the names of their immediate children
- Each session owns its own freshly seeded copy
"""

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional

from .paths import HOME_DIR, ROOT, parent_path, basename, child_path, is_canonical

logger = logging.getLogger(__name__)


class Mode(IntEnum):
    """Unix-style permission bits used for long listings."""
    IFREG = 0o100000  # regular file
    IFDIR = 0o040000  # directory

    FILE_DEFAULT = IFREG | 0o644
    DIR_DEFAULT = IFDIR | 0o755


@dataclass(frozen=True)
class Node:
    """Base class for all filesystem nodes."""
    mode: int

    def is_file(self) -> bool:
        """Check if this is a regular file."""
        return (self.mode & Mode.IFDIR) == 0

    def is_dir(self) -> bool:
        """Check if this is a directory."""
        return (self.mode & Mode.IFDIR) != 0

    def permissions(self) -> str:
        """Render the mode the way ``ls -l`` does."""
        type_char = 'd' if self.is_dir() else '-'
        bits = ''
        for shift in (6, 3, 0):
            triple = (self.mode >> shift) & 0o7
            bits += 'r' if triple & 0o4 else '-'
            bits += 'w' if triple & 0o2 else '-'
            bits += 'x' if triple & 0o1 else '-'
        return type_char + bits


@dataclass(frozen=True)
class FileNode(Node):
    """Regular file node."""
    content: str = ""

    def __init__(self, content: str = "", mode: int = Mode.FILE_DEFAULT):
        object.__setattr__(self, 'content', content)
        object.__setattr__(self, 'mode', mode)


@dataclass(frozen=True)
class DirNode(Node):
    """Directory node listing the names of its immediate children."""
    children: List[str] = field(default_factory=list)

    def __init__(self, children: Optional[List[str]] = None,
                 mode: int = Mode.DIR_DEFAULT):
        object.__setattr__(self, 'children', list(children or []))
        object.__setattr__(self, 'mode', mode)

    def with_child(self, name: str) -> 'DirNode':
        """Return a new DirNode with an additional child."""
        if name in self.children:
            return self
        return DirNode(self.children + [name], self.mode)

    def without_child(self, name: str) -> 'DirNode':
        """Return a new DirNode without the specified child."""
        return DirNode([child for child in self.children if child != name], self.mode)


SAMPLE_FILE = "Hello World!\nThis is a sample file.\nLine 3\nLine 4\nLine 5"
PASSWD_FILE = ("root:x:0:0:root:/root:/bin/bash\n"
               "user:x:1000:1000:user:/home/user:/bin/bash")


def seed_paths() -> Dict[str, Node]:
    """Build the fixed map every new session starts from."""
    return {
        ROOT: DirNode(['home', 'etc', 'var', 'usr']),
        '/home': DirNode(['user']),
        HOME_DIR: DirNode(['documents', 'downloads', 'example.txt']),
        HOME_DIR + '/example.txt': FileNode(SAMPLE_FILE),
        '/etc': DirNode(['passwd', 'hosts']),
        '/etc/passwd': FileNode(PASSWD_FILE),
    }


class FileSystem:
    """
    Path-keyed virtual filesystem.

    Lookups never fail loudly: a missing path is simply ``None``. The
    mutators return ``True`` on success and ``False`` when the operation
    cannot be applied, leaving the map untouched.
    """

    def __init__(self, paths: Optional[Dict[str, Node]] = None):
        # absolute path -> node
        self.paths: Dict[str, Node] = dict(paths) if paths is not None else seed_paths()

    # Queries

    def lookup(self, path: str) -> Optional[Node]:
        """Return the node stored at ``path`` or None."""
        return self.paths.get(path)

    def exists(self, path: str) -> bool:
        """Check if a path exists."""
        return path in self.paths

    def is_dir(self, path: str) -> bool:
        node = self.lookup(path)
        return node is not None and node.is_dir()

    def is_file(self, path: str) -> bool:
        node = self.lookup(path)
        return node is not None and node.is_file()

    def listdir(self, path: str) -> Optional[List[str]]:
        """List directory children in their stored order."""
        node = self.lookup(path)
        if node is None or not node.is_dir():
            return None
        return list(node.children)

    def read(self, path: str) -> Optional[str]:
        """Read entire file contents."""
        node = self.lookup(path)
        if node is None or not node.is_file():
            return None
        return node.content

    # Mutation

    def _parent_dir(self, path: str) -> Optional[DirNode]:
        """The directory a new node at ``path`` would hang off, if it may be created."""
        if path == ROOT or not is_canonical(path):
            return None
        node = self.lookup(parent_path(path))
        if node is None or not node.is_dir():
            return None
        return node

    def _link(self, path: str, node: Node) -> None:
        parent = parent_path(path)
        self.paths[parent] = self.paths[parent].with_child(basename(path))
        self.paths[path] = node

    def _unlink(self, path: str) -> None:
        parent = parent_path(path)
        self.paths[parent] = self.paths[parent].without_child(basename(path))
        for key in self._subtree(path):
            del self.paths[key]

    def _subtree(self, path: str) -> List[str]:
        prefix = child_path(path, '')
        return [key for key in self.paths if key == path or key.startswith(prefix)]

    def mkdir(self, path: str) -> bool:
        """Create a directory."""
        if self.exists(path) or self._parent_dir(path) is None:
            return False
        self._link(path, DirNode())
        logger.debug("mkdir %s", path)
        return True

    def write(self, path: str, content: str = "") -> bool:
        """Write content to a file (creates if doesn't exist)."""
        if self.is_dir(path) or self._parent_dir(path) is None:
            return False
        self._link(path, FileNode(content))
        logger.debug("write %s (%d chars)", path, len(content))
        return True

    def remove(self, path: str) -> bool:
        """Remove a file or a whole directory subtree."""
        if path == ROOT or not self.exists(path):
            return False
        self._unlink(path)
        logger.debug("remove %s", path)
        return True

    def _target(self, src: str, dst: str) -> Optional[str]:
        """Where ``src`` lands when copied or moved onto ``dst``."""
        if self.is_dir(dst):
            dst = child_path(dst, basename(src))
        if dst == src or dst.startswith(child_path(src, '')):
            return None
        if self._parent_dir(dst) is None or self.is_dir(dst):
            return None
        return dst

    def copy(self, src: str, dst: str) -> bool:
        """Copy a file or directory subtree."""
        if not self.exists(src):
            return False
        target = self._target(src, dst)
        if target is None:
            return False
        if self.exists(target):
            self._unlink(target)
        for key in sorted(self._subtree(src), key=len):
            new_key = target + key[len(src):]
            if key == src:
                self._link(new_key, self.paths[key])
            else:
                self.paths[new_key] = self.paths[key]
        logger.debug("copy %s -> %s", src, target)
        return True

    def move(self, src: str, dst: str) -> bool:
        """Move (rename) a file or directory subtree."""
        if src == ROOT or not self.copy(src, dst):
            return False
        self._unlink(src)
        logger.debug("moved %s", src)
        return True
