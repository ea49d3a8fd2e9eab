"""XML rendering for sitemaps and sitemap indexes.

Output is byte-exact: XML 1.0 declaration, ``urlset`` / ``sitemapindex``
root in the sitemaps namespace, and ``loc``, ``lastmod``, ``changefreq``,
``priority`` children in that order. Pretty output indents with tabs and
newlines; compact output has neither.
"""

from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote

from routemap.config import SitemapConfig, UrlEntry
from routemap.validation.rules import META_TAGS

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# Characters left alone by ECMAScript's encodeURI, besides alphanumerics and "_.-~"
_URI_SAFE = ";,/?:@&=+$!*'()#"

_XML_ESCAPES = (
    ("&", "&amp;"),
    ("'", "&apos;"),
    ('"', "&quot;"),
    ("<", "&lt;"),
    (">", "&gt;"),
)


def escape_url(url: str) -> str:
    """Percent-encode *url* like ``encodeURI``, then escape XML specials."""
    escaped = quote(url, safe=_URI_SAFE)
    for char, entity in _XML_ESCAPES:
        escaped = escaped.replace(char, entity)
    return escaped


def finalize_loc(loc: str, config: SitemapConfig) -> str:
    """Turn a relative location into the full, escaped URL written to the sitemap.

    One leading ``/`` is dropped before joining to the base URL; one
    trailing ``/`` is dropped after, then re-added in trailing-slash mode.
    """
    relative = loc[1:] if loc.startswith("/") else loc
    url = escape_url(config.root_url + relative)
    if url.endswith("/"):
        url = url[:-1]
    if config.trailing_slash:
        url += "/"
    return url


def format_tag_value(tag: str, value: Any) -> str:
    """Render a meta tag value; whole-number priorities keep one decimal."""
    if tag == "priority" and not isinstance(value, bool) and value in (0, 1):
        return f"{float(value):.1f}"
    return str(value)


def _layout(pretty: bool) -> tuple[str, str]:
    return ("\n", "\t") if pretty else ("", "")


def render_urlset(entries: Iterable[UrlEntry], config: SitemapConfig) -> str:
    """Render one ``<urlset>`` document.

    Each meta tag comes from the entry, or else from ``config.defaults``;
    tags set by neither are omitted.
    """
    nl, tab = _layout(config.pretty)
    parts = [XML_DECLARATION, nl, f'<urlset xmlns="{SITEMAP_NS}">', nl]
    for entry in entries:
        parts.append(f"{tab}<url>{nl}")
        parts.append(f"{tab}{tab}<loc>{entry.loc}</loc>{nl}")
        for tag, value in _merged_tags(entry, config.defaults).items():
            parts.append(f"{tab}{tab}<{tag}>{format_tag_value(tag, value)}</{tag}>{nl}")
        parts.append(f"{tab}</url>{nl}")
    parts.append("</urlset>")
    return "".join(parts)


def render_index(locations: Iterable[str], config: SitemapConfig) -> str:
    """Render a ``<sitemapindex>`` listing the given shard locations."""
    nl, tab = _layout(config.pretty)
    parts = [XML_DECLARATION, nl, f'<sitemapindex xmlns="{SITEMAP_NS}">', nl]
    for loc in locations:
        parts.append(f"{tab}<sitemap>{nl}{tab}{tab}<loc>{loc}</loc>{nl}{tab}</sitemap>{nl}")
    parts.append("</sitemapindex>")
    return "".join(parts)


def _merged_tags(entry: UrlEntry, defaults: Mapping[str, Any]) -> dict[str, Any]:
    own = entry.meta_tags()
    merged: dict[str, Any] = {}
    for tag in META_TAGS:
        if tag in own:
            merged[tag] = own[tag]
        elif defaults.get(tag) is not None:
            merged[tag] = defaults[tag]
    return merged
