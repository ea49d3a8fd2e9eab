"""Slug validation — plain structural checks on slug lists.

Usage::

    from routemap.validation import check_slugs, validate_slugs

    result = check_slugs(["my-article", {"id": 3, "priority": 0.8}])
    assert result

    validate_slugs([None], "/user/:id")   # raises InvalidSlugs
"""

from collections.abc import Mapping

from routemap.errors import InvalidSlugs
from routemap.validation.result import ValidationResult
from routemap.validation.rules import (
    CHANGEFREQS,
    META_TAGS,
    Rule,
    changefreq,
    check_meta_tags,
    is_number,
    is_scalar,
    lastmod,
    normalize_lastmod,
    priority,
)

__all__ = [
    "CHANGEFREQS",
    "META_TAGS",
    "Rule",
    "ValidationResult",
    "changefreq",
    "check_meta_tags",
    "check_slugs",
    "is_number",
    "is_scalar",
    "lastmod",
    "normalize_lastmod",
    "priority",
    "validate_slugs",
]


def check_slugs(candidates: object) -> ValidationResult:
    """Check that *candidates* is a well-formed list of slug entries.

    Each entry is either a scalar (string or number), bound later to the
    route's parameter, or a mapping from parameter names to scalars that may
    also carry ``lastmod``, ``changefreq`` and ``priority`` overrides.

    A mapping is invalid when it has no key besides the meta tags, when a
    parameter value is not a scalar, or when a meta tag is malformed.

    Pure function: nothing is raised and nothing is modified.
    """
    if isinstance(candidates, (str, bytes)) or not isinstance(candidates, (list, tuple)):
        return ValidationResult(errors=(f"slugs must be a list (got {candidates!r})",))

    errors: list[str] = []
    for index, entry in enumerate(candidates):
        label = f"slugs[{index}]"
        if is_scalar(entry):
            continue
        if not isinstance(entry, Mapping):
            errors.append(f"{label} must be a string, a number or a mapping (got {entry!r})")
            continue

        params = [key for key in entry if key not in META_TAGS]
        if not params:
            errors.append(f"{label} must have at least one key that is not a meta tag")
        for key in params:
            if not isinstance(key, str) or not is_scalar(entry[key]):
                errors.append(f"{label}[{key!r}] must be a string or a number (got {entry[key]!r})")
        errors.extend(f"{label}: {message}" for message in check_meta_tags(entry))

    return ValidationResult(errors=tuple(errors))


def validate_slugs(candidates: object, route_path: str) -> None:
    """Raise ``InvalidSlugs`` naming *route_path* if *candidates* is malformed."""
    result = check_slugs(candidates)
    if not result:
        raise InvalidSlugs(route_path, result.errors)
