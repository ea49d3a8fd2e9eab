"""Sitemap generation — literal URLs + resolved routes → XML documents.

Pipeline::

    1. Resolve the route tree into URL entries (concurrently)
    2. Prepend the literal URLs
    3. Finalize every location against the base URL
    4. Drop duplicate locations, first one wins (literal URLs beat routes)
    5. Split into shards of at most ``max_urls_per_sitemap`` entries
    6. Render each shard, plus an index when there is more than one

The result maps file names (without ``.xml``) to XML text; writing them is
up to the caller.
"""

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace
from typing import Any

import anyio

from routemap.config import SitemapConfig, UrlEntry, load_options
from routemap.rendering import escape_url, finalize_loc, render_index, render_urlset
from routemap.resolver import resolve_routes
from routemap.routing.route import Route

logger = logging.getLogger("routemap.sitemap")

SITEMAP_NAME = "sitemap"
INDEX_NAME = "sitemap-index"
SHARD_PREFIX = "sitemap-part-"


async def generate_sitemaps(
    config: SitemapConfig,
    urls: Iterable[str | UrlEntry | Mapping[str, Any]] = (),
    routes: Iterable[Route | Mapping[str, Any]] = (),
) -> dict[str, str]:
    """Generate the sitemap documents for *urls* and *routes*.

    Returns ``{"sitemap": xml}`` when everything fits in one file, or
    ``{"sitemap-part-1": xml, ..., "sitemap-index": xml}`` otherwise.

    Any slug error aborts the whole run; nothing is returned partially.
    """
    literal = [UrlEntry.from_value(url) for url in urls]
    tree = [Route.from_dict(route) for route in routes]

    resolved = await resolve_routes(tree)
    logger.debug("Resolved %d URL(s) from %d route(s)", len(resolved), len(tree))

    entries = dedupe(
        replace(entry, loc=finalize_loc(entry.loc, config))
        for entry in [*literal, *resolved]
    )
    return render_sitemaps(entries, config)


def generate_sitemaps_sync(
    config: SitemapConfig,
    urls: Iterable[str | UrlEntry | Mapping[str, Any]] = (),
    routes: Iterable[Route | Mapping[str, Any]] = (),
) -> dict[str, str]:
    """Blocking wrapper around ``generate_sitemaps()`` for build scripts."""
    return anyio.run(generate_sitemaps, config, urls, routes)


async def generate_sitemaps_from(options: Mapping[str, Any]) -> dict[str, str]:
    """Validate a plain options mapping, then generate the sitemaps.

    Usage::

        sitemaps = await generate_sitemaps_from({
            "base_url": "https://example.com",
            "routes": [{"path": "/"}, {"path": "/about"}],
        })
    """
    loaded = load_options(options)
    return await generate_sitemaps(loaded.config, loaded.urls, loaded.routes)


def dedupe(entries: Iterable[UrlEntry]) -> list[UrlEntry]:
    """Keep the first entry for each distinct ``loc``, preserving order."""
    seen: set[str] = set()
    unique: list[UrlEntry] = []
    for entry in entries:
        if entry.loc in seen:
            continue
        seen.add(entry.loc)
        unique.append(entry)
    return unique


def shard_names(count: int) -> list[str]:
    """File names for *count* shards: 1-based, zero-padded to a common width."""
    width = len(str(count))
    return [f"{SHARD_PREFIX}{index:0{width}d}" for index in range(1, count + 1)]


def render_sitemaps(entries: Sequence[UrlEntry], config: SitemapConfig) -> dict[str, str]:
    """Render finalized, deduplicated entries into one or more documents."""
    limit = config.max_urls_per_sitemap
    if len(entries) <= limit:
        return {SITEMAP_NAME: render_urlset(entries, config)}

    count = math.ceil(len(entries) / limit)
    names = shard_names(count)
    logger.debug("Splitting %d URL(s) into %d sitemap(s)", len(entries), count)

    sitemaps = {
        name: render_urlset(entries[index * limit : (index + 1) * limit], config)
        for index, name in enumerate(names)
    }
    root = config.base_url.rstrip("/")
    sitemaps[INDEX_NAME] = render_index(
        (escape_url(f"{root}/{name}.xml") for name in names), config
    )
    return sitemaps
