import random
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from facts import repository as facts_repository
from main import app

REPOSITORY_FUNCTIONS = (
    "list_facts",
    "get_fact",
    "insert_fact",
    "update_fact",
    "delete_fact",
    "search_by_title",
    "autocomplete_titles",
    "find_by_title_ignore_case",
    "random_fact",
)


class FakeFactStore:
    """In-memory stand-in for `facts.repository` with the same contract."""

    def __init__(self) -> None:
        self.rows: dict[str, dict[str, Any]] = {}
        self.calls: list[str] = []
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _now(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _ordered(self) -> list[dict[str, Any]]:
        return sorted(self.rows.values(), key=lambda r: (r["created_at"], r["id"]))

    async def list_facts(self) -> list[dict[str, Any]]:
        self.calls.append("list_facts")
        return [dict(r) for r in self._ordered()]

    async def get_fact(self, fact_id: str) -> dict[str, Any] | None:
        self.calls.append("get_fact")
        row = self.rows.get(fact_id)
        return dict(row) if row is not None else None

    async def insert_fact(self, *, title: str, body: str, tag: str, source_url: str | None = None) -> dict[str, Any]:
        self.calls.append("insert_fact")
        now = self._now()
        fact_id = str(uuid4())
        self.rows[fact_id] = {
            "id": fact_id,
            "title": title,
            "body": body,
            "tag": tag,
            "source_url": source_url,
            "created_at": now,
            "updated_at": now,
        }
        return dict(self.rows[fact_id])

    async def update_fact(
        self,
        fact_id: str,
        *,
        title: str,
        body: str,
        tag: str,
        source_url: str | None = None,
    ) -> dict[str, Any] | None:
        self.calls.append("update_fact")
        row = self.rows.get(fact_id)
        if row is None:
            return None
        row.update(
            title=title,
            body=body,
            tag=tag,
            source_url=source_url,
            updated_at=max(self._now(), row["created_at"]),
        )
        return dict(row)

    async def delete_fact(self, fact_id: str) -> bool:
        self.calls.append("delete_fact")
        return self.rows.pop(fact_id, None) is not None

    async def search_by_title(self, query: str) -> list[dict[str, Any]]:
        self.calls.append("search_by_title")
        q = query.lower()
        return [dict(r) for r in self._ordered() if q in r["title"].lower()]

    async def autocomplete_titles(self, partial: str, *, limit: int = 10, offset: int = 0) -> list[str]:
        self.calls.append("autocomplete_titles")
        titles: list[str] = []
        for row in self._ordered():
            title = row["title"]
            if title.lower().startswith(partial.lower()) and title not in titles:
                titles.append(title)
        return titles[offset:offset + limit]

    async def find_by_title_ignore_case(self, title: str) -> dict[str, Any] | None:
        self.calls.append("find_by_title_ignore_case")
        matches = [r for r in self._ordered() if r["title"].lower() == title.lower()]
        return dict(matches[-1]) if matches else None

    async def random_fact(self) -> dict[str, Any] | None:
        self.calls.append("random_fact")
        if not self.rows:
            return None
        return dict(random.choice(list(self.rows.values())))

    def add(self, title: str, body: str = "body", tag: str = "trivia", source_url: str | None = None) -> dict[str, Any]:
        """Seed a row synchronously."""
        now = self._now()
        fact_id = str(uuid4())
        self.rows[fact_id] = {
            "id": fact_id,
            "title": title,
            "body": body,
            "tag": tag,
            "source_url": source_url,
            "created_at": now,
            "updated_at": now,
        }
        return dict(self.rows[fact_id])


@pytest.fixture
def fact_store(monkeypatch) -> FakeFactStore:
    store = FakeFactStore()
    for name in REPOSITORY_FUNCTIONS:
        monkeypatch.setattr(facts_repository, name, getattr(store, name))
    return store


@pytest_asyncio.fixture
async def client(fact_store: FakeFactStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app; no lifespan, so no database pool."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
