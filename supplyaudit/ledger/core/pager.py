# MIT License
# Copyright (c) 2025 Hashborn

from typing import Any, AsyncIterator
from ...protocol.types.balances import Page
from ...protocol.types.common import MalformedPage, Table

async def next_page(snapshot, table: Table, page_size: int, start_key: Any = None) -> Page:
    """
    Request one page of `table` from the snapshot.

    `start_key` is the continuation key of the previous page, passed back
    untouched. It is None only for the first request.
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return await snapshot.read_page(table, page_size, start_key)

async def iter_pages(snapshot, table: Table, page_size: int) -> AsyncIterator[Page]:
    """
    Yields successive non-empty pages until the table is exhausted.

    Pages are strictly sequential: the cursor of page N+1 is the last key of page N.
    """
    page = await next_page(snapshot, table, page_size)
    while not page.is_empty:
        if page.next_key is None:
            # Restarting from the beginning would loop forever
            raise MalformedPage(f"{table.value}: non-empty page without a continuation key")
        yield page
        page = await next_page(snapshot, table, page_size, page.next_key)
