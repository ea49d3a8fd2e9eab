"""Routemap — build XML sitemaps from URL lists and route trees.

Expands nested, parameterised routes against their slugs (given inline or
fetched by sync/async factories), deduplicates the result, and renders
sitemaps, sharded with an index once a site outgrows one file.

Basic usage::

    from routemap import Route, SitemapConfig, generate_sitemaps_sync

    config = SitemapConfig(base_url="https://example.com")
    sitemaps = generate_sitemaps_sync(
        config,
        urls=["/contact"],
        routes=[
            Route("/"),
            Route("/blog/:slug", {"slugs": ["hello-world", "second-post"]}),
        ],
    )
    for name, xml in sitemaps.items():
        Path(f"dist/{name}.xml").write_text(xml)

From a plain mapping (e.g. a settings file)::

    sitemaps = await generate_sitemaps_from({
        "base_url": "https://example.com",
        "routes": [{"path": "/user/:id", "meta": {"sitemap": {"slugs": fetch_ids}}}],
    })
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "InvalidSlugs",
    "MissingSlugValue",
    "MissingSlugs",
    "Route",
    "RoutemapError",
    "SitemapConfig",
    "SitemapOptions",
    "SlugError",
    "SlugPatternMismatch",
    "UrlEntry",
    "generate_sitemaps",
    "generate_sitemaps_from",
    "generate_sitemaps_sync",
    "load_options",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routemap`` fast while providing a clean top-level API.
    """
    if name in ("SitemapConfig", "SitemapOptions", "UrlEntry", "load_options"):
        from routemap import config as _config

        return getattr(_config, name)

    if name == "Route":
        from routemap.routing.route import Route

        return Route

    if name in ("generate_sitemaps", "generate_sitemaps_from", "generate_sitemaps_sync"):
        from routemap import sitemap as _sitemap

        return getattr(_sitemap, name)

    if name in (
        "ConfigurationError",
        "InvalidSlugs",
        "MissingSlugValue",
        "MissingSlugs",
        "RoutemapError",
        "SlugError",
        "SlugPatternMismatch",
    ):
        from routemap import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
