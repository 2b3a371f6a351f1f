"""Shared fixtures for modkit tests."""

from __future__ import annotations

from typing import Any

import pytest

from modkit.core.mod import Mod


def _tagger(tag: str) -> Mod[dict[str, Any]]:
    def add_tag(item: dict[str, Any]) -> None:
        item.setdefault("tags", []).append(tag)

    return Mod(add_tag, name=f"tag_{tag}")


@pytest.fixture
def upper() -> Mod[str]:
    """Mod[str] that uppercases its item."""
    return Mod(lambda s: s.upper(), name="upper")


@pytest.fixture
def tag_a() -> Mod[dict[str, Any]]:
    """Appends "a" to item["tags"] in place."""
    return _tagger("a")


@pytest.fixture
def tag_b() -> Mod[dict[str, Any]]:
    return _tagger("b")


@pytest.fixture
def tag_c() -> Mod[dict[str, Any]]:
    return _tagger("c")


@pytest.fixture
def tagged_item() -> dict[str, Any]:
    return {"id": 1, "tags": ["start"]}
