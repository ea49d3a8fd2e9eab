"""Tests for routemap.__init__ — lazy import registry covers all public names."""

import pytest

import routemap


@pytest.mark.parametrize("name", routemap.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(routemap, name)
    assert obj is not None, f"routemap.{name} resolved to None"


def test_unknown_name_raises() -> None:
    with pytest.raises(AttributeError, match="no attribute 'Nope'"):
        routemap.Nope  # noqa: B018
