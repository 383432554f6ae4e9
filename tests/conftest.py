"""Shared fixtures: a small two-level shape with English and Spanish instances."""

from __future__ import annotations

import pytest

from lingo.numbers import default_registry
from lingo.schema import ChildShape, EntryKind, EntryShape, GroupShape
from lingo.structures import TrString, TrStringNumbers


def make_shape() -> GroupShape:
    errors = GroupShape(
        name="Errors",
        description="Messages shown when something goes wrong.",
        entries=[EntryShape("not_found", notes="Shown when a file is missing.")],
    )
    return GroupShape(
        name="General",
        label="General strings",
        description="Strings used throughout the application.",
        entries=[
            EntryShape("greeting"),
            EntryShape("items", EntryKind.PLURAL, notes="{0} is the number of items."),
        ],
        groups=[ChildShape("errors", errors)],
    )


def make_original() -> dict:
    return {
        "language": "en",
        "greeting": TrString("Hello"),
        "items": TrStringNumbers((True,), ["1 item", "{0} items"]),
        "errors": {"not_found": TrString("File not found")},
    }


def make_translation() -> dict:
    return {
        "language": "es",
        "greeting": TrString("Hola"),
        "items": TrStringNumbers((True,), ["1 elemento", "{0} elementos"]),
        "errors": {"not_found": TrString("")},
    }


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def shape():
    return make_shape()


@pytest.fixture
def original():
    return make_original()


@pytest.fixture
def translation():
    return make_translation()
