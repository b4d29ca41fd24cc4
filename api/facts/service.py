"""
Fact business logic.

Thin orchestration over `repository`: the service keeps no state, so every
call observes the current database. "Not found" is a `FactNotFoundError` for
mutations and a plain `None` for lookups.
"""

from __future__ import annotations

import logging
from typing import Any

from . import repository, schemas

logger = logging.getLogger(__name__)

# LIMIT/OFFSET are bigint in PostgreSQL.
MAX_OFFSET = 2**63 - 1


class FactNotFoundError(LookupError):
    def __init__(self, fact_id: str) -> None:
        super().__init__(f"Fact not found with id: {fact_id}")
        self.fact_id = fact_id


async def get_all_facts() -> list[dict[str, Any]]:
    return await repository.list_facts()


async def get_fact_by_id(fact_id: str) -> dict[str, Any] | None:
    return await repository.get_fact(fact_id)


async def create_fact(payload: schemas.FactCreate) -> dict[str, Any]:
    row = await repository.insert_fact(
        title=payload.title,
        body=payload.body,
        tag=payload.tag,
        source_url=payload.source_url,
    )
    logger.info("fact_created id=%s tag=%s", row["id"], row["tag"])
    return row


async def _require_fact(fact_id: str) -> dict[str, Any]:
    row = await repository.get_fact(fact_id)
    if row is None:
        logger.info("fact_not_found id=%s", fact_id)
        raise FactNotFoundError(fact_id)
    return row


async def update_fact(fact_id: str, payload: schemas.FactUpdate) -> dict[str, Any]:
    await _require_fact(fact_id)

    row = await repository.update_fact(
        fact_id,
        title=payload.title,
        body=payload.body,
        tag=payload.tag,
        source_url=payload.source_url,
    )
    if row is None:
        # Deleted between the lookup and the write.
        logger.info("fact_not_found id=%s", fact_id)
        raise FactNotFoundError(fact_id)

    logger.info("fact_updated id=%s", fact_id)
    return row


async def delete_fact(fact_id: str) -> None:
    await _require_fact(fact_id)

    deleted = await repository.delete_fact(fact_id)
    if not deleted:
        logger.info("fact_not_found id=%s", fact_id)
        raise FactNotFoundError(fact_id)

    logger.info("fact_deleted id=%s", fact_id)


async def search_facts_by_title(query: str) -> list[dict[str, Any]]:
    if not query:
        return []
    return await repository.search_by_title(query)


async def autocomplete_titles(partial: str, *, page: int = 0, size: int = 10) -> list[str]:
    """
    Return one page of distinct titles starting with `partial`.

    Pages are zero-indexed: page N skips the first N * size matches.
    """
    if page < 0:
        raise ValueError("page must be non-negative.")
    if size < 0:
        raise ValueError("size must be non-negative.")
    if size == 0:
        return []
    if page * size > MAX_OFFSET:
        raise ValueError("page is out of range.")

    return await repository.autocomplete_titles(
        partial or "",
        limit=size,
        offset=page * size,
    )


async def find_fact_by_title_ignore_case(title: str) -> dict[str, Any] | None:
    return await repository.find_by_title_ignore_case(title)


async def get_random_fact() -> dict[str, Any] | None:
    return await repository.random_fact()
