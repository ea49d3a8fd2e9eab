"""Invoke helpers — call sync or async factories uniformly.

Slug factories can be ``def``, ``async def``, generator functions, or
async generator functions. Any code that calls a user-provided factory must
handle all of them. This module provides a single helper so the check lives
in exactly one place.

Usage::

    from routemap._internal.invoke import invoke

    result = await invoke(factory)
"""

import inspect
from typing import Any


async def invoke(factory: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a factory and await the result if it's awaitable.

    Async generators are drained into a list, so callers always get a
    plain value back::

        # sync — returns immediately, no await needed
        def slugs():
            return ["a", "b"]

        # async — returns coroutine, awaited automatically
        async def slugs():
            rows = await fetch_articles()
            return [row.slug for row in rows]

        # async generator — collected into a list
        async def slugs():
            async for row in stream_articles():
                yield row.slug
    """
    result = factory(*args, **kwargs)
    if inspect.isasyncgen(result):
        return [item async for item in result]
    if inspect.isawaitable(result):
        result = await result
    return result
