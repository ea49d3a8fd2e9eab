"""Routemap exception hierarchy.

Shared across the config loader, resolver, and renderer so every module
raises and catches the same types. Messages are meant to be shown to the
user verbatim.
"""


class RoutemapError(Exception):
    """Base for all routemap-specific errors."""


class ConfigurationError(RoutemapError):
    """Raised when options, routes, URLs, or meta tags are invalid.

    Typically raised by ``load_options()`` or ``Route.from_dict()`` before
    any resolution starts.
    """


class SlugError(RoutemapError):
    """Base for errors raised while expanding a dynamic route.

    Any of these aborts the whole resolution; no partial sitemap is
    produced.
    """

    def __init__(self, route_path: str, message: str) -> None:
        super().__init__(message)
        self.route_path = route_path


class MissingSlugs(SlugError):  # noqa: N818
    """A dynamic route has no slug source."""

    def __init__(self, route_path: str) -> None:
        super().__init__(
            route_path,
            f"Need slugs to generate URLs from dynamic route {route_path!r}",
        )


class InvalidSlugs(SlugError):  # noqa: N818
    """A slug sequence failed structural validation.

    ``problems`` lists one description per offending entry.
    """

    def __init__(self, route_path: str, problems: tuple[str, ...]) -> None:
        detail = "; ".join(problems) or "invalid slugs"
        super().__init__(route_path, f"Invalid slugs for route {route_path!r}: {detail}")
        self.problems = problems


class MissingSlugValue(SlugError):  # noqa: N818
    """A slug lacks a value for a required path parameter."""

    def __init__(self, route_path: str, param: str) -> None:
        super().__init__(
            route_path,
            f"Need slug for param {param!r} of route {route_path!r}",
        )
        self.param = param


class SlugPatternMismatch(SlugError):  # noqa: N818
    """A slug value does not match the regex constraint of its parameter."""

    def __init__(self, route_path: str, param: str, value: str, pattern: str) -> None:
        super().__init__(
            route_path,
            f"Slug {value!r} for param {param!r} of route {route_path!r} "
            f"does not match pattern {pattern!r}",
        )
        self.param = param
        self.value = value
        self.pattern = pattern
