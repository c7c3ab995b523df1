"""
immupath.core — Non-mutating updates of nested plain data
=========================================================

MODEL
═════

§1  VALUES
──────────

Plain data is built from three kinds of value:

    Kind.SEQUENCE   list, tuple (namedtuples included)   indexed by int
    Kind.MAPPING    dict (subclasses included)            indexed by key
    Kind.SCALAR     anything else                         opaque

Nothing in this module ever writes into an existing container.  Every
"update" returns either the very same root object (nothing changed) or
a new root in which only the containers on the path to the change are
new.  Everything else is shared by reference:

        src                           result = set_at(src, ("a", "b"), 2)
        ├── "a" ──► {b: 1}            ├── "a" ──► {b: 2}      (new)
        └── "c" ──► [1, 2, 3]  ◄──────┴── "c"                 (shared)


§2  SAMENESS
────────────

The question "did the value change?" is answered by same(a, b):

    • containers are the same only if they are the same object;
    • scalars are the same if they are the same object, or have exactly
      the same type and compare equal (so 1 and 1, "x" and "x" match,
      but 1 and True or 1 and 1.0 do not).

When the new value at a path is the same as the old one, replace_at
returns the source root untouched and allocates nothing.  Callers can
therefore detect "no change" with a single `is` test on the root.


§3  REPLACING AT A PATH
───────────────────────

    replace_at(src, path, target):
        parent = get_at(src, path[:-1])
        old    = parent[path[-1]]            (None if parent is absent)
        new    = target.apply(old)
        if new is old:  return src
        chain  = [src, src[p0], src[p0][p1], ...]     (ancestors only)
        for node, key in reversed(zip(chain, path)):
            new = set_slot(node, key, new)
        return new

Intermediate containers are never created.  A write through a missing
intermediate raises PathError naming the prefix that could not be
followed; a read through one returns None.

Recursive (cyclic) values are not supported.  set() reconciles a new
literal against the old value recursively, one Python frame per level
of nesting, so literals nested deeper than the interpreter's recursion
limit (about 1000 levels by default) raise RecursionError.
"""

import logging
from copy import copy
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Iterable, Union

from .paths import Key, Path, as_path, format_path

logger = logging.getLogger(__name__)


class PathError(LookupError):
    """A path could not be followed while writing."""

    def __init__(self, message: str, path: Path = ()):
        super().__init__(message)
        self.path = path


# ═══════════════════════════════════════════════════════════════════
#  CONTAINER KINDS
# ═══════════════════════════════════════════════════════════════════

class Kind(Enum):
    """Structural kind of a value."""
    SCALAR = auto()
    SEQUENCE = auto()
    MAPPING = auto()


def kind_of(value: Any) -> Kind:
    """Classify a value as sequence, mapping or scalar."""
    if isinstance(value, (list, tuple)):
        return Kind.SEQUENCE
    if isinstance(value, dict):
        return Kind.MAPPING
    return Kind.SCALAR


def same(a: Any, b: Any) -> bool:
    """
    True if replacing `a` with `b` is not a change.

    Identity for containers, identity or same-type equality for
    scalars.  The bool/int guard mirrors Python's `True == 1`.
    """
    if a is b:
        return True
    if kind_of(a) is not Kind.SCALAR or type(a) is not type(b):
        return False
    # `is True` keeps array-likes, whose == is elementwise, on identity.
    return (a == b) is True


def _rebuild_sequence(template: Union[list, tuple], items: Iterable[Any]):
    """
    Build a sequence of the same type as `template` from `items`.

    A namedtuple only survives while the number of items still matches
    its fields; otherwise the result is a plain tuple.
    """
    if isinstance(template, tuple):
        cls = type(template)
        if hasattr(cls, "_make"):  # namedtuple
            items = list(items)
            if len(items) == len(cls._fields):
                return cls._make(items)
            return tuple(items)
        return cls(items)
    return list(items)


# ═══════════════════════════════════════════════════════════════════
#  TARGETS
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True, slots=True)
class Replace:
    """Target that puts a literal value at the path."""
    value: Any

    def apply(self, current: Any) -> Any:
        return set(current, self.value)


@dataclass(frozen=True, slots=True)
class Update:
    """Target that computes the new value from the current one."""
    fn: Callable[[Any], Any]

    def __post_init__(self):
        if not callable(self.fn):
            raise TypeError(f"updater must be callable, got {type(self.fn).__name__}")

    def apply(self, current: Any) -> Any:
        return set(current, self.fn(current))


Target = Union[Replace, Update]


# ═══════════════════════════════════════════════════════════════════
#  READING
# ═══════════════════════════════════════════════════════════════════

_ABSENT = object()


def _child(node: Any, key: Key, default: Any = None) -> Any:
    """Slot `key` of `node`, or `default` if there is no such slot."""
    kind = kind_of(node)
    if kind is Kind.MAPPING:
        return node.get(key, default)
    if kind is Kind.SEQUENCE:
        if isinstance(key, int) and -len(node) <= key < len(node):
            return node[key]
    return default


def get_at(src: Any, path: Iterable[Key]) -> Any:
    """
    Value at `path` inside `src`, or None if any step is missing.

        get_at({"a": [10, 20]}, ("a", 1))    → 20
        get_at({"a": None}, ("a", "b"))     → None
    """
    value = src
    for key in as_path(path):
        if value is None:
            return None
        value = _child(value, key)
    return value


# ═══════════════════════════════════════════════════════════════════
#  EDITING ONE SLOT
# ═══════════════════════════════════════════════════════════════════

def set_slot(container: Any, key: Key, value: Any, path: Path = ()) -> Any:
    """
    Shallow copy of `container` with slot `key` set to `value`.

    All other slots keep their original objects.  For sequences,
    `key == len(container)` appends.  `path` is only used in error
    messages.
    """
    kind = kind_of(container)

    if kind is Kind.SEQUENCE:
        if not isinstance(key, int) or isinstance(key, bool):
            raise TypeError(
                f"sequence index must be int, got {key!r} at {format_path(path)}"
            )
        size = len(container)
        if not -size <= key <= size:
            raise PathError(
                f"index {key} out of range for length {size} at {format_path(path)}",
                path,
            )
        clone = copy(container) if isinstance(container, list) else list(container)
        if key == size:
            clone.append(value)
        else:
            clone[key] = value
        if isinstance(container, list):
            return clone
        return _rebuild_sequence(container, clone)

    if kind is Kind.MAPPING:
        clone = copy(container)
        clone[key] = value
        return clone

    raise PathError(
        f"cannot set {key!r} on {type(container).__name__} at {format_path(path)}",
        path,
    )


# ═══════════════════════════════════════════════════════════════════
#  LITERAL REPLACEMENT
# ═══════════════════════════════════════════════════════════════════

def set(src: Any, target: Any) -> Any:
    """
    Replace `src` by `target`, keeping whatever did not change.

    Returns `src` itself if `target` is the same value or a copy that
    is equal slot for slot.  When both are containers of the same
    type, the result is a new container whose unchanged children are
    the objects from `src`.  Sequences are paired by position, so only
    when their lengths match; a sequence of another length is taken as
    given:

        old = {"a": [1, 2], "b": {"c": 1}}
        new = set(old, {"a": [1, 2], "b": {"c": 2}})
        new["a"] is old["a"]      → True
        set(old, {"a": [1, 2], "b": {"c": 1}}) is old   → True
    """
    if same(src, target):
        return src

    kind = kind_of(target)
    if kind is Kind.SCALAR or type(src) is not type(target):
        return target

    if kind is Kind.SEQUENCE:
        # Positions only line up when nothing was inserted or removed.
        if len(src) != len(target):
            return target
        items = [set(old, new) for old, new in zip(src, target)]
        if all(a is b for a, b in zip(items, src)):
            return src
        if all(a is b for a, b in zip(items, target)):
            return target
        return _rebuild_sequence(target, items)

    # Mapping
    entries = {k: set(src[k], v) if k in src else v for k, v in target.items()}
    if len(entries) == len(src) and all(
        k in src and src[k] is v for k, v in entries.items()
    ):
        return src
    if all(target[k] is v for k, v in entries.items()):
        return target
    clone = copy(target)
    clone.update(entries)
    return clone


# ═══════════════════════════════════════════════════════════════════
#  REPLACING AT A PATH
# ═══════════════════════════════════════════════════════════════════

def replace_at(src: Any, path: Iterable[Key], target: Target) -> Any:
    """
    Apply `target` at `path` inside `src` without mutating anything.

    This is the central function of the library; every other entry
    point is a thin wrapper.  Returns `src` itself when the new leaf
    is the same as the old one, otherwise a new root whose ancestors
    along `path` are fresh copies and whose other branches are shared.

    Raises PathError if an intermediate container is missing.
    """
    if not isinstance(target, (Replace, Update)):
        raise TypeError(
            f"target must be Replace or Update, got {type(target).__name__}"
        )
    path = as_path(path)

    if not path:
        # No parent to rebuild; apply() already returns src when unchanged.
        return target.apply(src)

    parent = get_at(src, path[:-1])
    old = _child(parent, path[-1]) if parent is not None else None
    new = target.apply(old)
    if new is old:
        return src

    chain = [src]
    node = src
    for depth, key in enumerate(path[:-1]):
        node = _child(node, key, _ABSENT)
        if node is _ABSENT or node is None or kind_of(node) is Kind.SCALAR:
            prefix = path[:depth + 1]
            raise PathError(f"no container at {format_path(prefix)}", prefix)
        chain.append(node)

    for depth in range(len(path) - 1, -1, -1):
        new = set_slot(chain[depth], path[depth], new, path[:depth + 1])

    logger.debug("rebuilt %d container(s) along %s", len(path), format_path(path))
    return new


# ═══════════════════════════════════════════════════════════════════
#  ENTRY POINTS
# ═══════════════════════════════════════════════════════════════════

def set_at(src: Any, path: Iterable[Key], target: Any) -> Any:
    """Put the literal `target` at `path`."""
    return replace_at(src, path, Replace(target))


def update_at(src: Any, path: Iterable[Key], updater: Callable[[Any], Any]) -> Any:
    """Replace the value at `path` by `updater(value)`."""
    return replace_at(src, path, Update(updater))


def delete_at(src: Any, path: Iterable[Key]) -> Any:
    """Set the value at `path` to None.  The key itself is kept."""
    return set_at(src, path, None)


def extend(src: Any, ext: dict) -> Any:
    """
    Shallow merge of the keys of `ext` into the mapping `src`.

    A None `src` is treated as an empty mapping.  Returns `src`
    itself if every value of `ext` is already the same in `src`.
    """
    if kind_of(ext) is not Kind.MAPPING:
        raise TypeError(f"extension must be a dict, got {type(ext).__name__}")
    if src is None:
        return copy(ext)
    if kind_of(src) is not Kind.MAPPING:
        raise TypeError(f"cannot extend {type(src).__name__}")
    merged = copy(src)
    merged.update(ext)
    return set(src, merged)


def extend_at(src: Any, path: Iterable[Key], ext: dict) -> Any:
    """Shallow merge `ext` into the mapping at `path`."""
    return update_at(src, path, lambda value: extend(value, ext))
