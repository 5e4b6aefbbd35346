"""
/documents endpoints.

Store a raw JSON document in its three forms, fetch them back, and compare
member order across the forms. The request body is read as raw text so the
stored original is exactly what the client sent.
"""

from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from database.adapter import DocumentStore
from database.errors import DocumentTooLarge, NotFound, ParseFailure, PersistenceFailure
from ordered_json.model import key_paths, parse_ordered


router = APIRouter()


class StoreResponse(BaseModel):
    """Response body for POST /documents."""

    id: int


class DocumentResponse(BaseModel):
    """Response body for GET /documents/{id}."""

    id: int
    normalized: str
    order_preserved: str
    raw: str
    created_at: str


class CompareResponse(BaseModel):
    """Member order of each stored form, as JSON-pointer paths."""

    id: int
    raw_keys: list[str]
    order_preserved_keys: list[str]
    normalized_keys: list[str]
    order_preserved_matches_raw: bool
    normalized_matches_raw: bool


def _store(request: Request) -> DocumentStore:
    """Get the DocumentStore from app state."""

    s = getattr(request.app.state, "store", None)
    if s is None:
        raise RuntimeError("Document store not initialized.")
    return s


def _fetch_or_404(store: DocumentStore, doc_id: int):
    try:
        return store.fetch(doc_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e)) from e


@router.post("/documents", response_model=StoreResponse, status_code=201)
async def store_document(request: Request) -> StoreResponse:
    """Store the raw request body as a JSON document."""

    body = await request.body()
    try:
        raw = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=400, detail="Body must be UTF-8 encoded JSON.") from e

    store = _store(request)
    try:
        # sqlite write and retry backoff block; keep them off the event loop.
        doc_id = await asyncio.to_thread(store.store, raw)
    except ParseFailure as e:
        raise HTTPException(status_code=400, detail=f"Invalid JSON: {e}") from e
    except DocumentTooLarge as e:
        raise HTTPException(status_code=413, detail=str(e)) from e
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    return StoreResponse(id=doc_id)


@router.get("/documents")
def list_documents(request: Request, limit: int = Query(25, ge=1, le=200)) -> dict[str, Any]:
    """Return the most recently stored documents."""

    try:
        items = _store(request).recent(limit=limit)
    except PersistenceFailure as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    return {
        "items": [{"id": d.id, "raw_length": d.raw_length, "created_at": d.created_at} for d in items],
        "count": len(items),
    }


@router.get("/documents/{doc_id}", response_model=DocumentResponse)
def get_document(doc_id: int, request: Request) -> DocumentResponse:
    """Return the normalized, order-preserved and raw forms as stored."""

    doc = _fetch_or_404(_store(request), doc_id)
    return DocumentResponse(
        id=doc.id,
        normalized=doc.normalized,
        order_preserved=doc.order_preserved,
        raw=doc.raw,
        created_at=doc.created_at,
    )


@router.get("/documents/{doc_id}/compare", response_model=CompareResponse)
def compare_document(doc_id: int, request: Request) -> CompareResponse:
    """Report member order for each stored form next to the original's."""

    doc = _fetch_or_404(_store(request), doc_id)
    raw_keys = key_paths(parse_ordered(doc.raw))
    preserved_keys = key_paths(parse_ordered(doc.order_preserved))
    normalized_keys = key_paths(parse_ordered(doc.normalized))
    return CompareResponse(
        id=doc.id,
        raw_keys=raw_keys,
        order_preserved_keys=preserved_keys,
        normalized_keys=normalized_keys,
        order_preserved_matches_raw=preserved_keys == raw_keys,
        normalized_matches_raw=normalized_keys == raw_keys,
    )
