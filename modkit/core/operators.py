"""Named forms of the Mod operators.

  compose(a, b, c)          a >> b >> c
  apply_to(item, a, b)      item @= a; item @= b
  copy_apply_to(item, a, b) item | a | b

Each is a left fold, so grouping never changes the result.
"""

from __future__ import annotations

from functools import reduce
from typing import Any, TypeVar

from modkit.core.mod import Mod

Item = TypeVar("Item")


def compose(*mods: Any) -> Mod[Any]:
    """Sequence Mods (or bare callables) left to right."""
    return reduce(lambda acc, m: acc >> m, mods, Mod.identity())


def apply_to(item: Item, *mods: Mod[Item]) -> Item:
    """Apply each Mod to the item itself, in order, and return the result."""
    return reduce(lambda acc, m: m.apply(acc), mods, item)


def copy_apply_to(item: Item, *mods: Mod[Item]) -> Item:
    """Copy-apply each Mod in order. The given item is never modified."""
    return reduce(lambda acc, m: m.applied(acc), mods, item)
