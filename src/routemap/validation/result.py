"""Validation result — immutable container for validation problems."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of checking a candidate slug list.

    ``is_valid`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = check_slugs(slugs)
        if not result:
            raise InvalidSlugs(route_path, result.errors)

    ``errors`` holds one human-readable message per problem, prefixed with
    the index of the offending entry::

        ("slugs[1] must be a string, a number or a mapping (got None)",)
    """

    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid
