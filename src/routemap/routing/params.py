"""Path template parsing and slug substitution.

Route paths use colon-prefixed parameters::

    "/users"                          -> static
    "/users/:id"                      -> one param
    "/article/:id(\\d+)/:title?"      -> regex-constrained + optional
    "/docs/:path*"  or  "/glob/*"     -> wildcard (never expanded)

A template is tokenized once into static text and ``PathParam`` tokens;
expansion walks the tokens instead of re-parsing the string per slug.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache

from routemap.errors import ConfigurationError, MissingSlugValue, SlugPatternMismatch

_NAME_RE = re.compile(r"[A-Za-z_]\w*")


@dataclass(frozen=True, slots=True)
class PathParam:
    """A dynamic parameter inside a path template.

    Plain:      ``:id``           (name="id")
    Regex:      ``:id(\\d+)``     (name="id", pattern=r"\\d+")
    Optional:   ``:title?``       (optional=True)
    Repeatable: ``:path*``        (repeatable=True, treated as a wildcard)
    """

    name: str
    pattern: str | None = None
    optional: bool = False
    repeatable: bool = False

    @property
    def regex(self) -> re.Pattern[str] | None:
        if self.pattern is None:
            return None
        return _compile(self.pattern)


type Token = str | PathParam


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


@dataclass(frozen=True, slots=True)
class PathTemplate:
    """A tokenized route path."""

    source: str
    tokens: tuple[Token, ...]

    @property
    def params(self) -> tuple[PathParam, ...]:
        return tuple(t for t in self.tokens if isinstance(t, PathParam))

    @property
    def is_dynamic(self) -> bool:
        return any(isinstance(t, PathParam) for t in self.tokens)

    @property
    def has_wildcard(self) -> bool:
        """True for a literal ``*`` or a repeatable parameter."""
        for token in self.tokens:
            if isinstance(token, PathParam):
                if token.repeatable:
                    return True
            elif "*" in token:
                return True
        return False

    def expand(self, values: Mapping[str, object], route_path: str | None = None) -> str:
        """Substitute *values* into the template.

        Optional parameters that are missing or empty are dropped together
        with the ``/`` in front of them.

        Raises ``MissingSlugValue`` if a required parameter is missing or empty.
        Raises ``SlugPatternMismatch`` if a value fails its parameter's regex.
        """
        route_path = route_path or self.source
        parts: list[str] = []

        for index, token in enumerate(self.tokens):
            if isinstance(token, str):
                parts.append(token)
                continue

            value = _slug_text(values.get(token.name))
            if not value and not token.optional:
                raise MissingSlugValue(route_path, token.name)

            if not value:
                following = self.tokens[index + 1] if index + 1 < len(self.tokens) else None
                ends_segment = following is None or (
                    isinstance(following, str) and following.startswith("/")
                )
                if ends_segment and parts and parts[-1].endswith("/"):
                    parts[-1] = parts[-1][:-1]
                continue

            regex = token.regex
            if regex is not None and regex.fullmatch(value) is None:
                raise SlugPatternMismatch(route_path, token.name, value, token.pattern or "")
            parts.append(value)

        return "".join(parts)


def _slug_text(raw: object) -> str:
    # Whole floats print without the fractional part, so 2.0 gives "2"
    if raw is None:
        return ""
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw)


def _read_group(path: str, start: int) -> int:
    """Return the index just past the parenthesised group opening at *start*."""
    depth = 0
    index = start
    while index < len(path):
        char = path[index]
        if char == "\\":
            index += 2
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index + 1
        index += 1
    msg = f"Unbalanced parenthesis in route path {path!r}"
    raise ConfigurationError(msg)


@lru_cache(maxsize=1024)
def parse_path(path: str) -> PathTemplate:
    """Tokenize a route path into static text and parameters.

    Examples::

        "/users"         -> ("/users",)
        "/users/:id"     -> ("/users/", PathParam("id"))
        "/a/:id(\\d+)?"  -> ("/a/", PathParam("id", pattern=r"\\d+", optional=True))

    A ``:`` not followed by an identifier is kept as static text.
    Raises ``ConfigurationError`` on unbalanced parentheses or a bad regex.
    """
    tokens: list[Token] = []
    text: list[str] = []
    index = 0

    while index < len(path):
        name_match = _NAME_RE.match(path, index + 1) if path[index] == ":" else None
        if name_match is None:
            text.append(path[index])
            index += 1
            continue

        if text:
            tokens.append("".join(text))
            text = []

        name = name_match.group()
        index = name_match.end()
        pattern: str | None = None
        if index < len(path) and path[index] == "(":
            end = _read_group(path, index)
            pattern = path[index + 1 : end - 1]
            index = end
            try:
                _compile(pattern)
            except re.error as exc:
                msg = f"Invalid pattern {pattern!r} for param {name!r} in route path {path!r}: {exc}"
                raise ConfigurationError(msg) from exc

        modifier = path[index] if index < len(path) and path[index] in "?*+" else ""
        if modifier:
            index += 1

        tokens.append(
            PathParam(
                name=name,
                pattern=pattern,
                optional=modifier in ("?", "*"),
                repeatable=modifier in ("*", "+"),
            )
        )

    if text:
        tokens.append("".join(text))

    return PathTemplate(source=path, tokens=tuple(tokens))
