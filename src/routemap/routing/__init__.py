"""Routing — route trees, path templates, and slug sources.

Routes are plain frozen data; the resolver walks them to produce URLs.
"""

from routemap.routing.params import PathParam, PathTemplate, parse_path
from routemap.routing.route import Route
from routemap.routing.slugs import LiteralSlugs, SlugFactory, SlugSource, materialize, slug_source

__all__ = [
    "LiteralSlugs",
    "PathParam",
    "PathTemplate",
    "Route",
    "SlugFactory",
    "SlugSource",
    "materialize",
    "parse_path",
    "slug_source",
]
