"""
immupath
========

Non-mutating updates of nested plain data (dicts, lists, tuples).

    set_at({"a": {"b": 1}, "c": [1]}, ("a", "b"), 2)   → {"a": {"b": 2}, "c": [1]}
    set_at(src, ("a", "b"), 1)                          → src itself (no change)
    push([1, 2, 3], 4, 5)                               → [1, 2, 3, 4, 5]
    splice_at({"list": [1, 2, 3]}, ("list",), 1, 1, 9)  → {"list": [1, 9, 3]}

Every function returns either the original object (nothing changed)
or a new root in which only the containers along the updated path are
new.  All other branches are shared with the source, so:

  • `result is src` tells whether anything changed
  • unchanged subtrees keep their identity, which is what the
    memoized selectors rely on
  • the source is never modified and can be shared freely
"""

from immupath.core import (
    # Types
    Kind,
    Replace,
    Update,
    Target,
    PathError,
    # Primitives
    kind_of,
    same,
    get_at,
    set_slot,
    replace_at,
    # Entry points
    set,
    set_at,
    update_at,
    delete_at,
    extend,
    extend_at,
)
from immupath.arrays import (
    push, push_at, pop, pop_at, insert, insert_at,
    splice, splice_at, shift, shift_at, unshift, unshift_at,
)
from immupath.selectors import (
    Selector, create_selector, create_structured_selector, create_path_selector,
)
from immupath.paths import Key, Path, as_path, parse_path, format_path

__version__ = "0.1.0"
__all__ = [
    "Kind", "Replace", "Update", "Target", "PathError",
    "kind_of", "same", "get_at", "set_slot", "replace_at",
    "set", "set_at", "update_at", "delete_at", "extend", "extend_at",
    "push", "push_at", "pop", "pop_at", "insert", "insert_at",
    "splice", "splice_at", "shift", "shift_at", "unshift", "unshift_at",
    "Selector", "create_selector", "create_structured_selector",
    "create_path_selector",
    "Key", "Path", "as_path", "parse_path", "format_path",
]
