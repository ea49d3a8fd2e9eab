"""Route resolution — expand a route tree into URL entries.

The tree is walked depth-first by a recursive coroutine that threads an
immutable context (parent path, parent meta) downward and returns a nested
result upward. Sibling subtrees run concurrently in an anyio task group;
each writes into its own slot, so the output keeps declaration order no
matter which slug factory finishes first.

Pipeline per route::

    1. Compute the path (absolute, or joined to the parent path)
    2. Merge meta: parent meta (minus ``loc``) overridden by own meta
    3. Skip ignored routes and wildcards without ``loc``
    4. ``loc`` set     -> children resolve under ``loc``, or one URL
    5. Static path     -> children resolve under the path, or one URL
    6. Dynamic path    -> materialize + validate slugs, expand per slug
"""

import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping, Sequence
from typing import Any

import anyio

from routemap.config import UrlEntry, clean_meta_tags
from routemap.errors import MissingSlugs
from routemap.routing.params import PathTemplate, parse_path
from routemap.routing.route import Route
from routemap.routing.slugs import materialize, slug_source
from routemap.validation import validate_slugs
from routemap.validation.rules import META_TAGS

logger = logging.getLogger("routemap.resolver")

# A resolved subtree: one entry, a discarded branch, or nested results
type Resolved = UrlEntry | None | list[Resolved]


async def resolve_routes(routes: Sequence[Route]) -> list[UrlEntry]:
    """Resolve *routes* into a flat list of URL entries, in declaration order.

    ``loc`` values are paths relative to the base URL; duplicates are kept.

    Raises ``MissingSlugs``, ``InvalidSlugs``, ``MissingSlugValue`` or
    ``SlugPatternMismatch`` on the first failing dynamic route. Exceptions
    raised by a slug factory propagate unchanged.
    """
    resolved = await _resolve_all(routes, "", {})
    return list(flatten(resolved))


def flatten(resolved: Resolved) -> Iterator[UrlEntry]:
    """Yield the entries of a resolved tree in order, dropping discarded branches."""
    if resolved is None:
        return
    if isinstance(resolved, UrlEntry):
        yield resolved
        return
    for item in resolved:
        yield from flatten(item)


async def gather_ordered(calls: Sequence[Callable[[], Awaitable[Any]]]) -> list[Any]:
    """Run *calls* concurrently and return their results in input order.

    If any call fails, the others are cancelled and the first failure is
    re-raised on its own rather than wrapped in an exception group.
    """
    slots: list[Any] = [None] * len(calls)

    async def _run(index: int, call: Callable[[], Awaitable[Any]]) -> None:
        slots[index] = await call()

    try:
        async with anyio.create_task_group() as tg:
            for index, call in enumerate(calls):
                tg.start_soon(_run, index, call)
    except BaseExceptionGroup as group:
        raise _first_leaf(group) from None

    return slots


def _first_leaf(group: BaseExceptionGroup) -> BaseException:
    first = group.exceptions[0]
    if isinstance(first, BaseExceptionGroup):
        return _first_leaf(first)
    return first


async def _resolve_all(
    routes: Sequence[Route],
    parent_path: str,
    parent_meta: Mapping[str, Any],
) -> list[Resolved]:
    return await gather_ordered([_bind(route, parent_path, parent_meta) for route in routes])


def _bind(
    route: Route, parent_path: str, parent_meta: Mapping[str, Any]
) -> Callable[[], Awaitable[Resolved]]:
    async def call() -> Resolved:
        return await _resolve_route(route, parent_path, parent_meta)

    return call


def _route_template(route_path: str, parent_path: str) -> PathTemplate:
    """Tokenize *route_path*, prefixed by the already-concrete parent path."""
    own = parse_path(route_path)
    if route_path.startswith("/"):
        return own
    prefix = parent_path.rstrip("/") + "/" if route_path else parent_path
    return PathTemplate(source=prefix + route_path, tokens=(prefix, *own.tokens))


async def _resolve_route(
    route: Route,
    parent_path: str,
    parent_meta: Mapping[str, Any],
) -> Resolved:
    template = _route_template(route.path, parent_path)
    path = template.source
    meta = {key: value for key, value in parent_meta.items() if key != "loc"}
    meta.update(route.meta)

    if meta.get("ignore_route"):
        logger.debug("Skipping ignored route %r", path)
        return None

    if "loc" in meta:
        loc = meta["loc"]
        if route.children:
            return await _resolve_all(route.children, loc, meta)
        return _entry(loc, meta, path)

    if parse_path(route.path).has_wildcard:
        logger.debug("Skipping wildcard route %r (no 'loc' set)", path)
        return None

    if not template.is_dynamic:
        if route.children:
            return await _resolve_all(route.children, path, meta)
        return _entry(path, meta, path)

    if meta.get("slugs") is None:
        raise MissingSlugs(path)

    slugs = await materialize(slug_source(meta["slugs"]))
    validate_slugs(slugs, path)
    logger.debug("Expanding dynamic route %r with %d slug(s)", path, len(slugs))  # type: ignore[arg-type]

    first_param = template.params[0].name
    expanded: list[tuple[str, dict[str, Any]]] = []
    for slug in slugs:  # type: ignore[union-attr]
        values = slug if isinstance(slug, Mapping) else {first_param: slug}
        concrete = template.expand(values, path)
        overrides = {tag: values[tag] for tag in META_TAGS if tag in values}
        expanded.append((concrete, {**meta, **overrides}))

    if route.children:
        calls = [
            _bind_children(route.children, concrete, slug_meta)
            for concrete, slug_meta in expanded
        ]
        return await gather_ordered(calls)
    return [_entry(concrete, slug_meta, path) for concrete, slug_meta in expanded]


def _bind_children(
    children: Sequence[Route], parent_path: str, parent_meta: Mapping[str, Any]
) -> Callable[[], Awaitable[Resolved]]:
    async def call() -> Resolved:
        return await _resolve_all(children, parent_path, parent_meta)

    return call


def _entry(loc: str, meta: Mapping[str, Any], path: str) -> UrlEntry:
    return UrlEntry(loc=loc, **clean_meta_tags(meta, f"route {path!r}"))
