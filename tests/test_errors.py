"""Tests for routemap.errors — exception hierarchy and error messages."""

from routemap.errors import (
    ConfigurationError,
    InvalidSlugs,
    MissingSlugs,
    MissingSlugValue,
    RoutemapError,
    SlugError,
    SlugPatternMismatch,
)


class TestHierarchy:
    def test_configuration_error_is_routemap_error(self) -> None:
        assert issubclass(ConfigurationError, RoutemapError)

    def test_slug_errors(self) -> None:
        for cls in (MissingSlugs, InvalidSlugs, MissingSlugValue, SlugPatternMismatch):
            assert issubclass(cls, SlugError)
            assert issubclass(cls, RoutemapError)


class TestMessages:
    def test_missing_slugs(self) -> None:
        err = MissingSlugs("/user/:id")
        assert err.route_path == "/user/:id"
        assert str(err) == "Need slugs to generate URLs from dynamic route '/user/:id'"

    def test_invalid_slugs(self) -> None:
        err = InvalidSlugs("/user/:id", ("slugs[0] is bad", "slugs[2] is worse"))
        assert str(err) == "Invalid slugs for route '/user/:id': slugs[0] is bad; slugs[2] is worse"

    def test_missing_slug_value(self) -> None:
        err = MissingSlugValue("/article/:title/:id", "id")
        assert err.param == "id"
        assert str(err) == "Need slug for param 'id' of route '/article/:title/:id'"

    def test_pattern_mismatch(self) -> None:
        err = SlugPatternMismatch("/user/:id(\\d+)", "id", "abc", "\\d+")
        message = str(err)
        assert "'abc'" in message
        assert "'id'" in message
        assert "/user/:id" in message
        assert err.pattern == "\\d+"
