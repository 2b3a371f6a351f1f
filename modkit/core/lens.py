"""Lens: an explicit read-write accessor from a root value to one of its parts.

A lens is a getter/setter pair. The setter may assign into the root in place
and return it, or build and return a new root (frozen models, tuples).
Well-formed lenses satisfy:
  set(r, get(r)) == r
  get(set(r, v)) == v
  set(set(r, v1), v2) == set(r, v2)
See modkit.core.invariants for checks of these laws.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

Root = TypeVar("Root")
Part = TypeVar("Part")
Sub = TypeVar("Sub")


class Lens(Generic[Root, Part]):
    """Getter/setter pair focusing one part of a root value."""

    def __init__(
        self,
        get: Callable[[Root], Part],
        set: Callable[[Root, Part], Root],
        name: str = "lens",
    ) -> None:
        self._get = get
        self._set = set
        self.name = name

    @classmethod
    def item(cls, key: Any) -> "Lens[Any, Any]":
        """Subscript lens: root[key] for mappings and mutable sequences."""

        def set_item(root: Any, part: Any) -> Any:
            root[key] = part
            return root

        return cls(lambda root: root[key], set_item, name=f"[{key!r}]")

    @classmethod
    def identity(cls) -> "Lens[Any, Any]":
        return cls(lambda root: root, lambda root, part: part, name="self")

    def get(self, root: Root) -> Part:
        return self._get(root)

    def set(self, root: Root, part: Part) -> Root:
        return self._set(root, part)

    def update(self, root: Root, fn: Callable[[Part], Part]) -> Root:
        """Read the part, transform it with fn, and write it back."""
        return self._set(root, fn(self._get(root)))

    def then(self, inner: "Lens[Part, Sub]") -> "Lens[Root, Sub]":
        """Focus through this lens, then through the inner one."""
        outer = self

        def get(root: Root) -> Sub:
            return inner.get(outer.get(root))

        def set(root: Root, sub: Sub) -> Root:
            return outer.update(root, lambda part: inner.set(part, sub))

        return Lens(get, set, name=f"{outer.name}.{inner.name}")

    def __truediv__(self, inner: "Lens[Part, Sub]") -> "Lens[Root, Sub]":
        if not isinstance(inner, Lens):
            return NotImplemented
        return self.then(inner)

    def __repr__(self) -> str:
        return f"Lens({self.name})"
