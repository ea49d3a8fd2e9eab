"""Route frozen dataclass — one node of a site's route tree."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from routemap.errors import ConfigurationError
from routemap.validation.rules import META_TAGS, check_meta_tags, normalize_lastmod

# Keys allowed in a route's sitemap meta
ROUTE_META_KEYS: frozenset[str] = frozenset({"loc", "ignore_route", "slugs", *META_TAGS})


@dataclass(frozen=True, slots=True)
class Route:
    """A route definition.

    ``meta`` holds the sitemap fields only: ``loc``, ``ignore_route``,
    ``slugs``, ``lastmod``, ``changefreq`` and ``priority``. Children
    inherit it, except ``loc``.

    Build trees directly::

        Route("/blog", {"changefreq": "weekly"}, children=(Route("articles"),))

    or from plain dicts with ``Route.from_dict()``.
    """

    path: str
    meta: Mapping[str, Any] = field(default_factory=dict)
    children: tuple["Route", ...] = ()

    @classmethod
    def from_dict(cls, data: "Route | Mapping[str, Any]") -> "Route":
        """Build a route tree from a router-style dict.

        The sitemap meta is read from ``data["meta"]["sitemap"]`` (other
        keys of ``meta`` are ignored) or from ``data["sitemap"]``::

            Route.from_dict({
                "path": "/user/:id",
                "meta": {"requires_auth": True, "sitemap": {"slugs": [1, 2]}},
                "children": [{"path": "settings"}],
            })

        Raises ``ConfigurationError`` on a missing path, unknown sitemap
        keys, or malformed meta tags. ``lastmod`` is normalised to a W3C
        date-time string.
        """
        if isinstance(data, Route):
            return data
        if not isinstance(data, Mapping):
            msg = f"Route must be a mapping (got {data!r})"
            raise ConfigurationError(msg)

        path = data.get("path")
        if not isinstance(path, str):
            msg = f"Route is missing a 'path' string: {dict(data)!r}"
            raise ConfigurationError(msg)

        meta = _sitemap_meta(data, path)
        children = data.get("children") or ()
        if not isinstance(children, (list, tuple)):
            msg = f"'children' of route {path!r} must be a list"
            raise ConfigurationError(msg)

        return cls(
            path=path,
            meta=meta,
            children=tuple(cls.from_dict(child) for child in children),
        )


def _sitemap_meta(data: Mapping[str, Any], path: str) -> dict[str, Any]:
    outer = data.get("meta") or {}
    if not isinstance(outer, Mapping):
        msg = f"'meta' of route {path!r} must be a mapping"
        raise ConfigurationError(msg)
    raw = outer.get("sitemap", data.get("sitemap")) or {}
    if not isinstance(raw, Mapping):
        msg = f"Sitemap meta of route {path!r} must be a mapping"
        raise ConfigurationError(msg)

    unknown = sorted(set(raw) - ROUTE_META_KEYS)
    if unknown:
        msg = f"Unknown sitemap meta key(s) {', '.join(unknown)} on route {path!r}"
        raise ConfigurationError(msg)

    errors = check_meta_tags(raw)
    if "loc" in raw and not isinstance(raw["loc"], str):
        errors.append(f"'loc' must be a string (got {raw['loc']!r})")
    if "ignore_route" in raw and not isinstance(raw["ignore_route"], bool):
        errors.append(f"'ignore_route' must be a boolean (got {raw['ignore_route']!r})")
    if errors:
        msg = f"Invalid sitemap meta on route {path!r}: {'; '.join(errors)}"
        raise ConfigurationError(msg)

    meta = dict(raw)
    if "lastmod" in meta:
        meta["lastmod"] = normalize_lastmod(meta["lastmod"])
    return meta
