"""Sitemap configuration.

SitemapConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.

``load_options()`` builds the config, literal URLs, and route tree from a
plain mapping (e.g. parsed from a project's settings file) and validates
them before any resolution starts.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from routemap.errors import ConfigurationError
from routemap.routing.route import Route
from routemap.validation.rules import META_TAGS, check_meta_tags, normalize_lastmod

# The sitemaps protocol caps every sitemap file at 50,000 URLs
MAX_URLS_PER_SITEMAP = 50_000


@dataclass(frozen=True, slots=True)
class UrlEntry:
    """One URL of the sitemap.

    ``loc`` is a path relative to the base URL until the location is
    finalized, then a full, escaped URL.
    """

    loc: str
    lastmod: str | None = None
    changefreq: str | None = None
    priority: float | None = None

    def meta_tags(self) -> dict[str, Any]:
        """The meta tags this entry sets, in sitemap order."""
        values = {"lastmod": self.lastmod, "changefreq": self.changefreq, "priority": self.priority}
        return {tag: value for tag, value in values.items() if value is not None}

    def __post_init__(self) -> None:
        tags = self.meta_tags()
        if tags:
            cleaned = clean_meta_tags(tags, f"URL {self.loc!r}")
            if "lastmod" in cleaned:
                object.__setattr__(self, "lastmod", cleaned["lastmod"])

    @classmethod
    def from_value(cls, value: "str | UrlEntry | Mapping[str, Any]") -> "UrlEntry":
        """Coerce a bare string or a ``{"loc": ..., **meta}`` mapping.

        Raises ``ConfigurationError`` on a missing ``loc``, unknown keys, or
        malformed meta tags.
        """
        if isinstance(value, UrlEntry):
            return value
        if isinstance(value, str):
            return cls(loc=value)
        if not isinstance(value, Mapping):
            msg = f"URL must be a string or a mapping (got {value!r})"
            raise ConfigurationError(msg)

        loc = value.get("loc")
        if not isinstance(loc, str):
            msg = f"URL is missing a 'loc' string: {dict(value)!r}"
            raise ConfigurationError(msg)
        unknown = sorted(set(value) - {"loc", *META_TAGS})
        if unknown:
            msg = f"Unknown key(s) {', '.join(unknown)} on URL {loc!r}"
            raise ConfigurationError(msg)

        return cls(loc=loc, **clean_meta_tags(value, f"URL {loc!r}"))


def clean_meta_tags(meta: Mapping[str, Any], owner: str) -> dict[str, Any]:
    """Validate the meta tags in *meta* and return them normalised.

    Keys other than the meta tags are ignored.
    Raises ``ConfigurationError`` naming *owner* if a tag is malformed.
    """
    errors = check_meta_tags(meta)
    if errors:
        msg = f"Invalid meta tags on {owner}: {'; '.join(errors)}"
        raise ConfigurationError(msg)
    tags = {tag: meta[tag] for tag in META_TAGS if tag in meta}
    if "lastmod" in tags:
        tags["lastmod"] = normalize_lastmod(tags["lastmod"])
    return tags


@dataclass(frozen=True, slots=True)
class SitemapConfig:
    """Sitemap generation options. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SitemapConfig(base_url="https://example.com", trailing_slash=True)
    """

    base_url: str = ""
    trailing_slash: bool = False
    # Insert "#/" after the base URL for client-side hash routing
    hash_mode: bool = False
    # Keep tabs and newlines in the rendered XML
    pretty: bool = False
    # Meta tags applied to every URL that doesn't set its own
    defaults: Mapping[str, Any] = field(default_factory=dict)
    max_urls_per_sitemap: int = MAX_URLS_PER_SITEMAP

    def __post_init__(self) -> None:
        limit = self.max_urls_per_sitemap
        if isinstance(limit, bool) or not isinstance(limit, int) or not 1 <= limit <= MAX_URLS_PER_SITEMAP:
            msg = f"'max_urls_per_sitemap' must be an integer from 1 to {MAX_URLS_PER_SITEMAP} (got {limit!r})"
            raise ConfigurationError(msg)
        if not isinstance(self.defaults, Mapping):
            msg = f"'defaults' must be a mapping (got {self.defaults!r})"
            raise ConfigurationError(msg)
        extra = sorted(set(self.defaults) - set(META_TAGS))
        if extra:
            msg = f"Unknown default meta tag(s): {', '.join(extra)}"
            raise ConfigurationError(msg)
        object.__setattr__(self, "defaults", clean_meta_tags(self.defaults, "defaults"))

    @property
    def root_url(self) -> str:
        """Base URL with exactly one trailing slash, plus ``#/`` in hash mode.

        Empty when no base URL is set.
        """
        if not self.base_url:
            return ""
        root = self.base_url.rstrip("/") + "/"
        if self.hash_mode:
            root += "#/"
        return root


@dataclass(frozen=True, slots=True)
class SitemapOptions:
    """Everything needed for one generation run."""

    config: SitemapConfig
    urls: tuple[UrlEntry, ...] = ()
    routes: tuple[Route, ...] = ()


_OPTION_KEYS = frozenset(
    {"base_url", "trailing_slash", "hash_mode", "pretty", "defaults", "urls", "routes"}
)

# Either a domain name with a TLD (optional port) or a bare IPv4 address
_BASE_URL_RE = re.compile(
    r"^https?://(?:[^\s/?#]+\.[^\W\d_]+|(?:\d{1,3}\.){3}\d{1,3})(?::\d{1,5})?/?$",
)
_ABSOLUTE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def load_options(options: Mapping[str, Any]) -> SitemapOptions:
    """Validate a plain options mapping and build ``SitemapOptions``.

    Rules:

    - only the known keys are accepted;
    - at least one URL or one route is required;
    - ``base_url`` must be an http(s) URL, and routes require one;
    - with a base URL, URL locations must be relative paths; without one,
      they must be absolute http(s) URLs.

    Raises ``ConfigurationError`` describing the first problem found.
    """
    unknown = sorted(set(options) - _OPTION_KEYS)
    if unknown:
        msg = f"Unknown option(s): {', '.join(unknown)}"
        raise ConfigurationError(msg)

    base_url = options.get("base_url") or ""
    if not isinstance(base_url, str):
        msg = f"'base_url' must be a string (got {base_url!r})"
        raise ConfigurationError(msg)
    if base_url and not _BASE_URL_RE.match(base_url):
        msg = f"'base_url' must be an http(s) URL (got {base_url!r})"
        raise ConfigurationError(msg)

    for flag in ("trailing_slash", "hash_mode", "pretty"):
        if not isinstance(options.get(flag, False), bool):
            msg = f"{flag!r} must be a boolean (got {options[flag]!r})"
            raise ConfigurationError(msg)

    defaults = options.get("defaults") or {}
    if not isinstance(defaults, Mapping):
        msg = f"'defaults' must be a mapping (got {defaults!r})"
        raise ConfigurationError(msg)
    urls = tuple(UrlEntry.from_value(url) for url in _sequence(options, "urls"))
    routes = tuple(Route.from_dict(route) for route in _sequence(options, "routes"))

    if not urls and not routes:
        msg = "At least one URL or one route is required"
        raise ConfigurationError(msg)
    if routes and not base_url:
        msg = "'base_url' is required to generate URLs from routes"
        raise ConfigurationError(msg)

    for url in urls:
        absolute = bool(_ABSOLUTE_URL_RE.match(url.loc))
        if base_url and absolute:
            msg = f"URL {url.loc!r} must be a relative path when 'base_url' is set"
            raise ConfigurationError(msg)
        if not base_url and not absolute:
            msg = f"URL {url.loc!r} must be a full http(s) URL when 'base_url' is not set"
            raise ConfigurationError(msg)

    config = SitemapConfig(
        base_url=base_url,
        trailing_slash=options.get("trailing_slash", False),
        hash_mode=options.get("hash_mode", False),
        pretty=options.get("pretty", False),
        defaults=defaults,
    )
    return SitemapOptions(config=config, urls=urls, routes=routes)


def _sequence(options: Mapping[str, Any], key: str) -> Sequence[Any]:
    value = options.get(key) or ()
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        msg = f"{key!r} must be a list (got {value!r})"
        raise ConfigurationError(msg)
    return value
