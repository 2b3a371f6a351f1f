"""Mod: a composable wrapper around a single item-update function.

A Mod holds one block, a callable that takes an item and either returns the
updated item or mutates it in place and returns None. Everything else
(concatenation, appending, operators, pullback, for_each) is built on top of
that one primitive.

Operator summary:
  a >> b          run a, then b, on the same item
  item | mod      copy the item, apply mod to the copy, return the copy
  item @= mod     apply mod to the item itself and rebind the result

`@` binds tighter than `>>`, so the expression form needs parentheses:
`item @ (a >> b)`. The augmented form `item @= a >> b` needs none.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel

from modkit.core.lens import Lens

Item = TypeVar("Item")
Root = TypeVar("Root")

Block = Callable[[Any], Any]


def default_copy(item: Any) -> Any:
    """Independent copy of an item: deep model copy for pydantic, deepcopy otherwise.

    Items holding handles that cannot be deep-copied (locks, sockets, native
    widgets) get a shallow duplicate instead.
    """
    if isinstance(item, BaseModel):
        return item.model_copy(deep=True)
    try:
        return copy.deepcopy(item)
    except TypeError:
        return copy.copy(item)


def _run(block: Block, item: Any) -> Any:
    result = block(item)
    return item if result is None else result


def _sequence(blocks: tuple[Block, ...]) -> Block:
    def run(item: Any) -> Any:
        for block in blocks:
            item = _run(block, item)
        return item

    return run


def _coerce(other: Any) -> "Mod[Any]":
    if isinstance(other, Mod):
        return other
    if callable(other):
        return Mod(other)
    raise TypeError(f"Expected a Mod or callable, got {type(other).__name__}")


def _flatten(others: tuple[Any, ...]) -> tuple[Any, ...]:
    # A single non-callable iterable argument stands for the sequence itself.
    if len(others) == 1 and not callable(others[0]) and isinstance(others[0], Iterable):
        return tuple(others[0])
    return others


class Mod(Generic[Item]):
    """Wraps a block that modifies an item of a given type.

    The block receives the item and may return the updated item, or mutate
    the item in place and return None. Mods are reusable across any number
    of items and never hold a reference to one.
    """

    def __init__(self, block: Callable[[Item], Item | None], name: str | None = None) -> None:
        if isinstance(block, Mod):
            # Wrapping a Mod keeps its in-place block, not its copying __call__.
            self._block: Block = block._block
            self._name = name or block._name
            self._steps: tuple[str, ...] = (name,) if name else block._steps
            return
        if not callable(block):
            raise TypeError(f"Mod block must be callable, got {type(block).__name__}")
        self._block = block
        self._name = name or getattr(block, "__name__", type(block).__name__)
        self._steps = (self._name,)

    @classmethod
    def _from_parts(cls, block: Block, name: str, steps: tuple[str, ...]) -> "Mod[Any]":
        mod = cls.__new__(cls)
        mod._block = block
        mod._name = name
        mod._steps = steps
        return mod

    @classmethod
    def identity(cls) -> "Mod[Any]":
        """A Mod that leaves every item unchanged."""
        return cls._from_parts(lambda item: item, "identity", ())

    # --- Naming ---

    @property
    def name(self) -> str:
        return self._name

    @property
    def steps(self) -> tuple[str, ...]:
        """Leaf step names in execution order."""
        return self._steps

    def describe(self) -> str:
        """Human-readable description of this Mod's steps."""
        if not self._steps:
            return "identity"
        return " >> ".join(self._steps)

    def __repr__(self) -> str:
        return f"Mod({self.describe()})"

    # --- Application ---

    def apply(self, item: Item) -> Item:
        """Apply the block to the item itself (no copy) and return the result.

        For mutable items the result is the same object, mutated in place.
        For immutable items rebind the caller's name to the returned value.
        """
        return _run(self._block, item)

    def apply_to_object(self, obj: Item) -> None:
        """Mutate a shared object through its existing reference.

        The block's return value is discarded, so the mutation is only
        visible when the block changes the object in place; every alias of
        the object then observes it.
        """
        self.apply(obj)

    def applied(self, item: Item, copier: Callable[[Item], Item] | None = None) -> Item:
        """Copy the item, apply the block to the copy, and return the copy."""
        duplicate = (copier or default_copy)(item)
        return self.apply(duplicate)

    def __call__(self, item: Item) -> Item:
        return self.applied(item)

    # --- Composition ---

    @classmethod
    def concatenate(cls, *mods: Any) -> "Mod[Any]":
        """A Mod running each given Mod (or bare callable) consecutively.

        Accepts the mods variadically or as a single iterable. An empty
        input yields an identity Mod.
        """
        coerced = tuple(_coerce(m) for m in _flatten(mods))
        blocks = tuple(m._block for m in coerced)
        steps = tuple(s for m in coerced for s in m._steps)
        name = " >> ".join(m._name for m in coerced) or "identity"
        return cls._from_parts(_sequence(blocks), name, steps)

    def append(self, *others: Any) -> None:
        """After the current block, run each of the given Mods or callables.

        Mutates this Mod: every holder of this object sees the new behavior.
        """
        coerced = tuple(_coerce(o) for o in _flatten(others))
        self._block = _sequence((self._block,) + tuple(m._block for m in coerced))
        self._steps = self._steps + tuple(s for m in coerced for s in m._steps)

    def appending(self, *others: Any) -> "Mod[Item]":
        """A new Mod running this one followed by each of the given steps.

        This Mod is left unchanged.
        """
        return type(self).concatenate(self, *_flatten(others))

    def __rshift__(self, other: Any) -> "Mod[Item]":
        if not callable(other):
            return NotImplemented
        return type(self).concatenate(self, other)

    def __rrshift__(self, other: Any) -> "Mod[Item]":
        if not callable(other):
            return NotImplemented
        return type(self).concatenate(other, self)

    # --- Operator application ---

    def __ror__(self, item: Item) -> Item:
        # item | mod
        return self.applied(item)

    def __rmatmul__(self, item: Item) -> Item:
        # item @= mod; item @ (a >> b)
        return self.apply(item)

    # --- Transforms ---

    def pullback(self, lens: Lens[Root, Item]) -> "Mod[Root]":
        """Lift this Mod to a root type by focusing on one part of it.

        The part is read through the lens, modified once, and written back.
        Nothing outside the focused part is touched.
        """
        block = self._block

        def run(root: Root) -> Root:
            return lens.update(root, lambda part: _run(block, part))

        steps = tuple(f"{lens.name}.{s}" for s in self._steps)
        return type(self)._from_parts(run, f"{self._name}@{lens.name}", steps)

    def for_each(self, lens: Lens[Root, Any]) -> "Mod[Root]":
        """Lift this Mod to a root holding a sequence of items.

        The sequence at the lens is replaced by a new one holding a modified
        copy of every element, in the original order.
        """
        block = self._block

        def run(root: Root) -> Root:
            def map_items(items: Any) -> Any:
                mapped = [_run(block, default_copy(i)) for i in items]
                if isinstance(items, tuple):
                    return tuple(mapped)
                return mapped

            return lens.update(root, map_items)

        steps = tuple(f"{lens.name}[*].{s}" for s in self._steps)
        return type(self)._from_parts(run, f"{self._name}@{lens.name}[*]", steps)


def concatenate(mods: Iterable[Any]) -> Mod[Any]:
    """Module-level form of Mod.concatenate taking an ordered iterable."""
    return Mod.concatenate(tuple(mods))


def configure(item: Item, mod: Mod[Item]) -> Item:
    """Apply the Mod to a copy of the item and return the modified copy.

    Reads well when building a fresh object:

        button = configure(Button(), title("OK") >> border(width=1))
    """
    return mod.applied(item)
