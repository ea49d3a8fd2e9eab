"""Tests for routemap.routing.slugs — slug source tagging and materialize()."""

from collections.abc import AsyncIterator, Iterator

import anyio
import pytest

from routemap.routing.slugs import LiteralSlugs, SlugFactory, materialize, slug_source


class TestSlugSource:
    def test_list_is_literal(self) -> None:
        assert slug_source([1, 2]) == LiteralSlugs([1, 2])

    def test_callable_is_factory(self) -> None:
        def factory() -> list[int]:
            return [1]

        assert slug_source(factory) == SlugFactory(factory)

    def test_tagged_passthrough(self) -> None:
        source = LiteralSlugs(("a",))
        assert slug_source(source) is source

    def test_non_list_literal_is_not_rejected_here(self) -> None:
        assert slug_source(5) == LiteralSlugs(5)


class TestMaterialize:
    @pytest.mark.anyio
    async def test_literal(self) -> None:
        assert await materialize(LiteralSlugs(["a", "b"])) == ["a", "b"]

    @pytest.mark.anyio
    async def test_sync_factory(self) -> None:
        assert await materialize(slug_source(lambda: [1, 2, 3])) == [1, 2, 3]

    @pytest.mark.anyio
    async def test_async_factory(self) -> None:
        async def factory() -> list[int]:
            await anyio.sleep(0)
            return [1, 2, 3]

        assert await materialize(slug_source(factory)) == [1, 2, 3]

    @pytest.mark.anyio
    async def test_generator_factory(self) -> None:
        def factory() -> Iterator[str]:
            yield "a"
            yield "b"

        assert await materialize(slug_source(factory)) == ["a", "b"]

    @pytest.mark.anyio
    async def test_async_generator_factory(self) -> None:
        async def factory() -> AsyncIterator[str]:
            for slug in ("x", "y"):
                await anyio.sleep(0)
                yield slug

        assert await materialize(slug_source(factory)) == ["x", "y"]

    @pytest.mark.anyio
    async def test_invalid_values_pass_through(self) -> None:
        async def factory() -> int:
            return 5

        assert await materialize(slug_source(factory)) == 5

    @pytest.mark.anyio
    async def test_factory_errors_propagate(self) -> None:
        def factory() -> list[str]:
            msg = "database is down"
            raise RuntimeError(msg)

        with pytest.raises(RuntimeError, match="database is down"):
            await materialize(slug_source(factory))
