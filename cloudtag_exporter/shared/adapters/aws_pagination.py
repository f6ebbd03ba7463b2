from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from typing import Any

import structlog

logger = structlog.get_logger()


async def iter_capped_pages(
    paginator: Any,
    *,
    operation_name: str,
    paginate_kwargs: dict[str, Any],
    max_pages: int,
    on_page: Callable[[], None] | None = None,
) -> AsyncGenerator[dict[str, Any], None]:
    """
    Stream AWS paginator pages, stopping after `max_pages` pages.

    `on_page` fires once for every page received from the provider, before the
    page is yielded. Provider errors propagate unchanged and end the stream.
    Reaching the cap is silent truncation for the caller, so it is logged.
    """
    if max_pages <= 0:
        raise ValueError("max_pages must be > 0")

    pages_seen = 0
    async for page in paginator.paginate(**paginate_kwargs):
        pages_seen += 1
        if on_page is not None:
            on_page()
        yield page
        if pages_seen >= max_pages:
            logger.warning(
                "aws_paginator_page_cap_reached",
                operation=operation_name,
                max_pages=max_pages,
            )
            break
