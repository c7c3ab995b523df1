"""
immupath.arrays — Non-mutating list operations.

Each operation mirrors a mutating list method but returns a new
sequence of the same type (list or tuple), or the input itself when
the operation changes nothing:

    push([1, 2], 3)            → [1, 2, 3]
    pop([1, 2, 3], 0)          → the same list object
    splice([1, 2, 3], 1, 1, 9) → [1, 9, 3]

The *_at variants apply the operation to the sequence found at a path
and write the result back with set_at, so the ancestors are rebuilt
and everything else is shared.

A result is compared with the input slot by slot only when its length
is unchanged (see core.set), so inserted values are always kept exactly
as passed.
"""

from typing import Any, Iterable, Optional, Union

from .core import Kind, _rebuild_sequence, get_at, kind_of, set, set_at
from .paths import Key, as_path

Sequence = Union[list, tuple]


def _require_sequence(src: Any, operation: str) -> None:
    if kind_of(src) is not Kind.SEQUENCE:
        raise TypeError(
            f"{operation}() expects a list or tuple, got {type(src).__name__}"
        )


def _finish(src: Sequence, items: list) -> Sequence:
    # Same length and same elements collapse back to `src`.
    return set(src, _rebuild_sequence(src, items))


# ═══════════════════════════════════════════════════════════════════
#  SEQUENCE OPERATIONS
# ═══════════════════════════════════════════════════════════════════

def push(src: Sequence, *values: Any) -> Sequence:
    """Append `values` at the end."""
    _require_sequence(src, "push")
    if not values:
        return src
    return _finish(src, [*src, *values])


def pop(src: Sequence, n: int = 1) -> Sequence:
    """Drop the last `n` items.  `n <= 0` changes nothing."""
    _require_sequence(src, "pop")
    if n <= 0:
        return src
    return _finish(src, list(src[:max(len(src) - n, 0)]))


def insert(src: Sequence, at: int, *values: Any) -> Sequence:
    """Insert `values` before index `at` (negative counts from the end)."""
    _require_sequence(src, "insert")
    if not values:
        return src
    return _finish(src, [*src[:at], *values, *src[at:]])


def splice(
    src: Sequence, start: int, delete_count: Optional[int] = None, *values: Any
) -> Sequence:
    """
    Remove `delete_count` items from `start` and insert `values` there.

    `start` follows slice rules (negative counts from the end, out of
    range is clamped).  `delete_count=None` removes everything from
    `start` on; a negative count removes nothing.
    """
    _require_sequence(src, "splice")
    start = slice(start, None).indices(len(src))[0]
    remaining = len(src) - start
    if delete_count is None:
        delete_count = remaining
    delete_count = max(0, min(delete_count, remaining))
    if not delete_count and not values:
        return src
    return _finish(src, [*src[:start], *values, *src[start + delete_count:]])


def shift(src: Sequence, n: int = 1) -> Sequence:
    """Drop the first `n` items.  `n <= 0` changes nothing."""
    _require_sequence(src, "shift")
    if n <= 0:
        return src
    return _finish(src, list(src[n:]))


def unshift(src: Sequence, *values: Any) -> Sequence:
    """Prepend `values`."""
    _require_sequence(src, "unshift")
    if not values:
        return src
    return _finish(src, [*values, *src])


# ═══════════════════════════════════════════════════════════════════
#  PATH-SCOPED VARIANTS
# ═══════════════════════════════════════════════════════════════════

def push_at(src: Any, path: Iterable[Key], *values: Any) -> Any:
    path = as_path(path)
    return set_at(src, path, push(get_at(src, path), *values))


def pop_at(src: Any, path: Iterable[Key], n: int = 1) -> Any:
    path = as_path(path)
    return set_at(src, path, pop(get_at(src, path), n))


def insert_at(src: Any, path: Iterable[Key], at: int, *values: Any) -> Any:
    path = as_path(path)
    return set_at(src, path, insert(get_at(src, path), at, *values))


def splice_at(
    src: Any,
    path: Iterable[Key],
    start: int,
    delete_count: Optional[int] = None,
    *values: Any,
) -> Any:
    path = as_path(path)
    return set_at(src, path, splice(get_at(src, path), start, delete_count, *values))


def shift_at(src: Any, path: Iterable[Key], n: int = 1) -> Any:
    path = as_path(path)
    return set_at(src, path, shift(get_at(src, path), n))


def unshift_at(src: Any, path: Iterable[Key], *values: Any) -> Any:
    path = as_path(path)
    return set_at(src, path, unshift(get_at(src, path), *values))
