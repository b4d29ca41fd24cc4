"""
Fact persistence (raw SQL).

One function per query shape the service needs; nothing here builds queries
dynamically. Rows come back as plain dicts keyed by column name.
"""

from __future__ import annotations

from typing import Any

from core import db

FACT_COLUMNS = "id, title, body, tag, source_url, created_at, updated_at"

# Arbitrary key; concurrent workers take turns running the DDL below.
SCHEMA_LOCK_KEY = 42420001

# Sent as one simple-protocol batch, which runs in a single implicit
# transaction, so the xact lock is held until the DDL commits.
SCHEMA_SQL = f"""
SELECT pg_advisory_xact_lock({SCHEMA_LOCK_KEY});

CREATE TABLE IF NOT EXISTS facts (
  id          varchar(36)  PRIMARY KEY DEFAULT gen_random_uuid()::text,
  title       varchar(255) NOT NULL,
  body        text         NOT NULL,
  tag         varchar(50)  NOT NULL,
  source_url  varchar(500),
  created_at  timestamptz  NOT NULL DEFAULT now(),
  updated_at  timestamptz  NOT NULL DEFAULT now(),
  CONSTRAINT facts_updated_after_created CHECK (updated_at >= created_at)
);

CREATE INDEX IF NOT EXISTS idx_facts_title_lower
  ON facts (lower(title) text_pattern_ops);
"""


def _like_prefix(value: str) -> str:
    """
    Build a LIKE pattern matching `value` literally as a prefix.

    Used with `ESCAPE '\\'` so user-typed % and _ do not act as wildcards.
    """
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped + "%"


async def ensure_schema() -> None:
    await db.execute(SCHEMA_SQL)


async def list_facts() -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {FACT_COLUMNS}
        FROM facts
        ORDER BY created_at ASC, id ASC
        """
    )


async def get_fact(fact_id: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {FACT_COLUMNS}
        FROM facts
        WHERE id = $1
        """,
        fact_id,
    )


async def insert_fact(
    *,
    title: str,
    body: str,
    tag: str,
    source_url: str | None = None,
) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO facts (title, body, tag, source_url)
        VALUES ($1, $2, $3, $4)
        RETURNING {FACT_COLUMNS}
        """,
        title,
        body,
        tag,
        source_url,
    )
    if row is None:
        raise RuntimeError("Failed to insert fact.")
    return row


async def update_fact(
    fact_id: str,
    *,
    title: str,
    body: str,
    tag: str,
    source_url: str | None = None,
) -> dict[str, Any] | None:
    """
    Overwrite the mutable columns of one fact.
    Returns the updated row, or None when the id no longer exists.
    """
    return await db.fetch_one(
        f"""
        UPDATE facts
        SET title = $2,
            body = $3,
            tag = $4,
            source_url = $5,
            updated_at = greatest(now(), created_at)
        WHERE id = $1
        RETURNING {FACT_COLUMNS}
        """,
        fact_id,
        title,
        body,
        tag,
        source_url,
    )


async def delete_fact(fact_id: str) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM facts
        WHERE id = $1
        RETURNING id
        """,
        fact_id,
    )
    return row is not None


async def search_by_title(query: str) -> list[dict[str, Any]]:
    """
    Case-insensitive substring match on title.
    strpos() keeps % and _ literal, unlike LIKE.
    """
    return await db.fetch_all(
        f"""
        SELECT {FACT_COLUMNS}
        FROM facts
        WHERE strpos(lower(title), lower($1)) > 0
        ORDER BY created_at ASC, id ASC
        """,
        query,
    )


async def autocomplete_titles(partial: str, *, limit: int = 10, offset: int = 0) -> list[str]:
    """
    Distinct titles starting with `partial` (case-insensitive), in order of
    first appearance.
    """
    rows = await db.fetch_all(
        """
        SELECT title
        FROM facts
        WHERE lower(title) LIKE lower($1) ESCAPE '\\'
        GROUP BY title
        ORDER BY min(created_at) ASC, title ASC
        LIMIT $2
        OFFSET $3
        """,
        _like_prefix(partial),
        limit,
        offset,
    )
    return [str(row["title"]) for row in rows]


async def find_by_title_ignore_case(title: str) -> dict[str, Any] | None:
    # Titles are not unique; the newest match wins.
    return await db.fetch_one(
        f"""
        SELECT {FACT_COLUMNS}
        FROM facts
        WHERE lower(title) = lower($1)
        ORDER BY created_at DESC, id DESC
        LIMIT 1
        """,
        title,
    )


async def random_fact() -> dict[str, Any] | None:
    """
    Pick one row uniformly at random.

    ORDER BY random() scans the whole table; fine at this scale.
    """
    return await db.fetch_one(
        f"""
        SELECT {FACT_COLUMNS}
        FROM facts
        ORDER BY random()
        LIMIT 1
        """
    )
