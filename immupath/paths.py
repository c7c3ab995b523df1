"""
immupath.paths — Path values and their text form.

A path is a tuple of keys leading from a root value down to one slot:

    ("users", 0, "name")      ↔   users[0].name
    ()                        ↔   (root)
    ("a.b", -1)               ↔   ["a.b"][-1]

Supported conversions:
    • Any iterable of keys → validated path tuple
    • Dotted/bracketed text → path tuple
    • Path tuple → dotted/bracketed text (for messages and logs)
"""

import json
import re
from typing import Iterable, Union

Key = Union[int, str]
Path = tuple[Key, ...]

ROOT_LABEL = "(root)"

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_TOKEN = re.compile(
    r"""
      \.?(?P<name>[A-Za-z_][A-Za-z0-9_]*)      # .name
    | \[(?P<index>-?\d+)\]                    # [3]
    | \[(?P<quoted>"(?:[^"\\]|\\.)*")\]       # ["any key"]
    """,
    re.VERBOSE,
)


# ═══════════════════════════════════════════════════════════════════
#  VALIDATION
# ═══════════════════════════════════════════════════════════════════

def as_path(path: Iterable[Key]) -> Path:
    """
    Normalize `path` into a tuple of keys.

    A bare string is refused rather than split into characters; use
    parse_path for the text form.  Keys must be int or str (bool is
    an int subclass but never a meaningful key).
    """
    if isinstance(path, tuple) and all(_valid_key(k) for k in path):
        return path
    if isinstance(path, (str, bytes)):
        raise TypeError(
            f"path must be a sequence of keys, not {type(path).__name__} "
            f"{path!r}; use parse_path() for dotted paths"
        )
    try:
        keys = tuple(path)
    except TypeError:
        raise TypeError(
            f"path must be a sequence of keys, got {type(path).__name__}"
        ) from None
    for key in keys:
        if not _valid_key(key):
            raise TypeError(
                f"path keys must be int or str, got {type(key).__name__} {key!r}"
            )
    return keys


def _valid_key(key) -> bool:
    return isinstance(key, (int, str)) and not isinstance(key, bool)


# ═══════════════════════════════════════════════════════════════════
#  TEXT  ↔  PATH
# ═══════════════════════════════════════════════════════════════════

def parse_path(text: str) -> Path:
    """
    Parse dotted/bracketed text into a path tuple.

        parse_path("users[0].name")    → ("users", 0, "name")
        parse_path('meta["a.b"]')      → ("meta", "a.b")
        parse_path("")                 → ()
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")

    keys: list[Key] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN.match(text, pos)
        # Names are dot-separated, except the first one which has no dot.
        if match is None or (
            match.group("name") is not None
            and (text[pos] == ".") != (pos > 0)
        ):
            raise ValueError(f"malformed path {text!r} at offset {pos}")
        if match.group("name") is not None:
            keys.append(match.group("name"))
        elif match.group("index") is not None:
            keys.append(int(match.group("index")))
        else:
            keys.append(json.loads(match.group("quoted")))
        pos = match.end()
    return tuple(keys)


def format_path(path: Iterable[Key]) -> str:
    """Render a path the way parse_path reads it."""
    parts: list[str] = []
    for key in as_path(path):
        if isinstance(key, int):
            parts.append(f"[{key}]")
        elif _IDENTIFIER.fullmatch(key):
            parts.append(f".{key}" if parts else key)
        else:
            parts.append(f"[{json.dumps(key)}]")
    return "".join(parts) or ROOT_LABEL
