"""
Fact API endpoints.

Static paths (/search, /autocomplete, /random, /title/...) are registered
before /{fact_id} so they are never captured by the id route.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response, status

from core import settings

from . import schemas, service

router = APIRouter(prefix="/api/facts")


@router.get("", response_model=list[schemas.FactResponse])
async def list_facts() -> list[dict]:
    return await service.get_all_facts()


@router.get("/search", response_model=list[schemas.FactResponse])
async def search_facts(
    query: str = Query(..., description="Substring to look for in fact titles."),
) -> list[dict]:
    return await service.search_facts_by_title(query)


@router.get("/autocomplete", response_model=list[str])
async def autocomplete_titles(
    partial: str = Query(..., description="Title prefix, matched case-insensitively."),
    page: int = Query(0, ge=0, description="Zero-indexed page number."),
    size: int = Query(10, ge=0, description="Titles per page."),
) -> list[str]:
    max_size = settings.autocomplete_max_size()
    if size > max_size:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"size must be at most {max_size}.",
        )
    if page * size > service.MAX_OFFSET:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="page is out of range.",
        )
    return await service.autocomplete_titles(partial, page=page, size=size)


@router.get("/random", response_model=schemas.FactResponse)
async def random_fact() -> dict:
    row = await service.get_random_fact()
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No facts found.")
    return row


@router.get("/title/{title:path}", response_model=schemas.FactResponse)
async def fact_by_title(title: str) -> dict:
    row = await service.find_fact_by_title_ignore_case(title)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fact not found.")
    return row


@router.post("", response_model=schemas.FactResponse, status_code=status.HTTP_201_CREATED)
async def create_fact(request: schemas.FactCreate) -> dict:
    return await service.create_fact(request)


@router.get("/{fact_id}", response_model=schemas.FactResponse)
async def get_fact(fact_id: UUID) -> dict:
    row = await service.get_fact_by_id(str(fact_id))
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Fact not found with id: {fact_id}",
        )
    return row


@router.put("/{fact_id}", response_model=schemas.FactResponse)
async def update_fact(fact_id: UUID, request: schemas.FactUpdate) -> dict:
    try:
        return await service.update_fact(str(fact_id), request)
    except service.FactNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.delete("/{fact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_fact(fact_id: UUID) -> Response:
    try:
        await service.delete_fact(str(fact_id))
    except service.FactNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
