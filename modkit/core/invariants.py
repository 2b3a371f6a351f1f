"""Checks for lens laws and pulled-back Mod isolation.

Each check returns a list of violation messages (empty when the law holds).
Checks run on copies, so the given root is never modified.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from modkit.core.lens import Lens
from modkit.core.mod import Mod, default_copy


def check_lens_get_set(lens: Lens[Any, Any], root: Any) -> list[str]:
    """Writing back what was read must leave the root unchanged."""
    violations: list[str] = []
    written = lens.set(default_copy(root), lens.get(default_copy(root)))
    if written != root:
        violations.append(
            f"Lens {lens.name}: set(r, get(r)) changed the root ({written!r} != {root!r})"
        )
    return violations


def check_lens_set_get(lens: Lens[Any, Any], root: Any, part: Any) -> list[str]:
    """Reading right after a write must return the written part."""
    violations: list[str] = []
    read = lens.get(lens.set(default_copy(root), default_copy(part)))
    if read != part:
        violations.append(
            f"Lens {lens.name}: get(set(r, v)) returned {read!r}, expected {part!r}"
        )
    return violations


def check_lens_set_set(lens: Lens[Any, Any], root: Any, first: Any, second: Any) -> list[str]:
    """Two writes in a row must equal the last write alone."""
    violations: list[str] = []
    twice = lens.set(lens.set(default_copy(root), default_copy(first)), default_copy(second))
    once = lens.set(default_copy(root), default_copy(second))
    if twice != once:
        violations.append(
            f"Lens {lens.name}: set(set(r, v1), v2) != set(r, v2) "
            f"({twice!r} != {once!r})"
        )
    return violations


def check_field_isolation(
    mod: Mod[Any],
    root: Any,
    rest: Callable[[Any], Any],
) -> list[str]:
    """A pulled-back Mod must leave everything outside its focus unchanged.

    ``rest`` projects the root onto everything the Mod should not touch,
    e.g. ``lambda p: (p.age, p.friends)`` for a Mod focused on ``name``.
    """
    violations: list[str] = []
    before = rest(root)
    after = rest(mod.applied(root))
    if before != after:
        violations.append(
            f"Mod {mod.name}: changed data outside its focus ({before!r} -> {after!r})"
        )
    return violations


def validate_lens(lens: Lens[Any, Any], root: Any, samples: Iterable[Any]) -> list[str]:
    """Run every lens law against the root and each pair of sample parts."""
    samples = list(samples)
    violations = check_lens_get_set(lens, root)
    for part in samples:
        violations.extend(check_lens_set_get(lens, root, part))
    for first in samples:
        for second in samples:
            violations.extend(check_lens_set_set(lens, root, first, second))
    return violations


class LensLawViolation(Exception):
    """Raised by assert_lens_laws when a lens breaks one of its laws."""

    def __init__(self, lens_name: str, violations: list[str]) -> None:
        self.lens_name = lens_name
        self.violations = violations
        msg = f"Lens law violation for {lens_name}:\n" + "\n".join(violations)
        super().__init__(msg)


def assert_lens_laws(lens: Lens[Any, Any], root: Any, samples: Iterable[Any]) -> None:
    """Raise LensLawViolation unless the lens satisfies every law."""
    violations = validate_lens(lens, root, samples)
    if violations:
        raise LensLawViolation(lens.name, violations)
