"""Tests for routemap.routing.route — Route frozen dataclass and from_dict()."""

from datetime import date

import pytest

from routemap.errors import ConfigurationError
from routemap.routing.route import Route


class TestRoute:
    def test_defaults(self) -> None:
        route = Route("/about")
        assert route.meta == {}
        assert route.children == ()

    def test_frozen(self) -> None:
        route = Route("/about")
        with pytest.raises(AttributeError):
            route.path = "/other"  # type: ignore[misc]


class TestFromDict:
    def test_router_style_meta(self) -> None:
        route = Route.from_dict(
            {
                "path": "/user/:id",
                "name": "user",
                "meta": {"requires_auth": True, "sitemap": {"slugs": [1, 2]}},
                "children": [{"path": "settings"}],
            }
        )
        assert route == Route("/user/:id", {"slugs": [1, 2]}, (Route("settings"),))

    def test_top_level_sitemap_key(self) -> None:
        route = Route.from_dict({"path": "/a", "sitemap": {"priority": 0.5}})
        assert route.meta == {"priority": 0.5}

    def test_no_meta(self) -> None:
        assert Route.from_dict({"path": "/a", "meta": {"title": "A"}}).meta == {}

    def test_route_passthrough(self) -> None:
        route = Route("/a")
        assert Route.from_dict(route) is route

    def test_nested_children(self) -> None:
        route = Route.from_dict(
            {"path": "/a", "children": [{"path": "b", "children": [{"path": "c"}]}]}
        )
        assert route.children[0].children[0].path == "c"

    def test_lastmod_is_normalised(self) -> None:
        route = Route.from_dict({"path": "/a", "sitemap": {"lastmod": date(2020, 1, 1)}})
        assert route.meta["lastmod"] == "2020-01-01"

    def test_slug_factory_is_kept(self) -> None:
        def slugs() -> list[int]:
            return [1]

        route = Route.from_dict({"path": "/u/:id", "sitemap": {"slugs": slugs}})
        assert route.meta["slugs"] is slugs

    def test_missing_path(self) -> None:
        with pytest.raises(ConfigurationError, match="'path'"):
            Route.from_dict({"meta": {}})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ConfigurationError):
            Route.from_dict("/about")  # type: ignore[arg-type]

    def test_unknown_sitemap_key(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            Route.from_dict({"path": "/a", "sitemap": {"weight": 3}})
        assert "weight" in str(exc_info.value)
        assert "'/a'" in str(exc_info.value)

    def test_bad_meta_tag(self) -> None:
        with pytest.raises(ConfigurationError, match="priority"):
            Route.from_dict({"path": "/a", "sitemap": {"priority": 3}})

    def test_bad_ignore_route(self) -> None:
        with pytest.raises(ConfigurationError, match="ignore_route"):
            Route.from_dict({"path": "/a", "sitemap": {"ignore_route": "yes"}})

    def test_children_must_be_a_list(self) -> None:
        with pytest.raises(ConfigurationError, match="children"):
            Route.from_dict({"path": "/a", "children": "b"})
