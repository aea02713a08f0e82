"""
Path resolution for the teaching shell.

Paths are plain strings. Resolution is purely syntactic: whether the result
exists is for the caller to ask the filesystem.
"""

ROOT = '/'
HOME_DIR = '/home/user'


def child_path(directory: str, name: str) -> str:
    """Join a name onto a directory without doubling the root slash."""
    if directory == ROOT:
        return ROOT + name
    return f"{directory}/{name}"


def parent_path(path: str) -> str:
    """Drop the last segment; the root is its own parent."""
    parent = path.rsplit('/', 1)[0]
    return parent or ROOT


def basename(path: str) -> str:
    return path.rsplit('/', 1)[-1]


def join_path(token: str, cwd: str) -> str:
    """Absolute tokens are taken verbatim, anything else hangs off ``cwd``."""
    if token.startswith('/'):
        return token
    return child_path(cwd, token)


def resolve(token: str, cwd: str, home: str = HOME_DIR) -> str:
    """
    Turn a user-supplied path token into an absolute path.

    Handles the empty token and ``~`` (home), a bare ``..`` (parent of
    ``cwd``), absolute tokens, and single relative names. Embedded ``..`` or
    ``.`` segments are not normalised.
    """
    if not token or token == '~':
        return home
    if token == '..':
        return parent_path(cwd)
    return join_path(token, cwd)


def is_canonical(path: str) -> bool:
    """True for ``/`` and for absolute paths made only of real names."""
    if path == ROOT:
        return True
    if not path.startswith('/'):
        return False
    return all(name not in ('', '.', '..') for name in path[1:].split('/'))


def strip_trailing_slash(token: str) -> str:
    """``dir/`` names the same thing as ``dir``; a lone ``/`` stays the root."""
    return token.rstrip('/') or token[:1]
