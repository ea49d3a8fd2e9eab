"""Slug sources — literal lists or factories, materialized the same way.

A route's ``slugs`` meta value is either a list of slug entries or a
zero-argument callable producing one (sync, async, generator, or async
generator). ``slug_source()`` tags the value once; ``materialize()`` turns
either variant into a list so the resolver has a single code path.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from routemap._internal.invoke import invoke


@dataclass(frozen=True, slots=True)
class LiteralSlugs:
    """Slugs given inline in the route meta."""

    entries: object


@dataclass(frozen=True, slots=True)
class SlugFactory:
    """Slugs produced at resolution time by calling ``factory()``."""

    factory: Callable[[], Any]


type SlugSource = LiteralSlugs | SlugFactory


def slug_source(value: object) -> SlugSource:
    """Tag a raw ``slugs`` meta value. Already-tagged values pass through."""
    if isinstance(value, (LiteralSlugs, SlugFactory)):
        return value
    if callable(value):
        return SlugFactory(value)
    return LiteralSlugs(value)


async def materialize(source: SlugSource) -> object:
    """Produce the slug entries for *source*.

    Factories are invoked (and awaited when needed); iterables other than
    lists, tuples, strings and mappings (e.g. a generator) are collected into
    a list. The result is not validated here.
    """
    if isinstance(source, SlugFactory):
        entries = await invoke(source.factory)
    else:
        entries = source.entries

    if isinstance(entries, Iterable) and not isinstance(entries, (list, tuple, str, bytes, Mapping)):
        entries = list(entries)
    return entries
