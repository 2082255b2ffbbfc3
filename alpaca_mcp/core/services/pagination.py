"""Cursor pagination over ``next_page_token`` responses."""

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Protocol, TypeVar


class Page(Protocol):
    next_page_token: str | None


P = TypeVar("P", bound=Page)


async def iterate_pages(
    fetch_page: Callable[[str | None], Awaitable[P]],
) -> AsyncIterator[P]:
    """Yield pages until one arrives without a continuation token.

    ``fetch_page`` receives ``None`` for the first page and the previous
    page's token afterwards. Pages are fetched one at a time; an exception
    from ``fetch_page`` ends the iteration.
    """
    page_token: str | None = None
    while True:
        page = await fetch_page(page_token)
        yield page
        page_token = page.next_page_token
        if not page_token:
            return
