from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from src.recipes import Category, FilterSelection, Recipe, SearchSession
from src.recipes.session import FetchResult, FetchStatus


router = APIRouter(prefix="/recipes", tags=["recipes"])


class TextSearchRequest(BaseModel):
    query: str = Field(..., description="Free-text query, e.g. 'chicken'. Blank queries are ignored.")


class CategorySearchRequest(BaseModel):
    category: Category = Field(..., description="Application category mapped to a provider dish type.")
    health: Optional[List[str]] = Field(
        default=None,
        description="Health filter labels. Omit to use the saved selection.",
    )
    diet: Optional[List[str]] = Field(
        default=None,
        description="Diet filter labels. Omit to use the saved selection.",
    )


class TermsSearchRequest(BaseModel):
    terms: List[str] = Field(..., description="Ingredient terms; results are appended to the current list.")


class LookupRequest(BaseModel):
    uris: List[str] = Field(..., description="Provider recipe URIs, e.g. '...#recipe_<id>'.")


class RecipeRecordOut(BaseModel):
    id: UUID
    recipe: Recipe


class SessionState(BaseModel):
    results: List[RecipeRecordOut] = Field(default_factory=list)
    has_more: bool = Field(False, description="True when a next page can be fetched.")


class OperationResult(BaseModel):
    status: FetchStatus
    added: int = 0
    reason: Optional[str] = None
    error: Optional[str] = None


class OperationResponse(SessionState):
    outcome: OperationResult


class LookupResponse(SessionState):
    outcomes: List[OperationResult] = Field(default_factory=list)


def get_session(request: Request) -> SearchSession:
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Search session is not initialised")
    return session


def _state(session: SearchSession) -> dict:
    return {
        "results": [
            RecipeRecordOut(id=record.id, recipe=record.recipe) for record in session.results
        ],
        "has_more": session.has_more,
    }


def _outcome(result: FetchResult) -> OperationResult:
    return OperationResult(
        status=result.status,
        added=result.added,
        reason=result.reason,
        error=str(result.error) if result.error is not None else None,
    )


@router.get("", summary="Current results", response_model=SessionState)
async def current_results(session: SearchSession = Depends(get_session)) -> SessionState:
    return SessionState(**_state(session))


@router.delete("", summary="Clear results", response_model=SessionState)
async def clear_results(session: SearchSession = Depends(get_session)) -> SessionState:
    session.reset()
    return SessionState(**_state(session))


@router.post("/search", summary="Free-text search", response_model=OperationResponse)
async def search_by_text(
    request: TextSearchRequest, session: SearchSession = Depends(get_session)
) -> OperationResponse:
    result = await session.search_by_text(request.query)
    return OperationResponse(outcome=_outcome(result), **_state(session))


@router.post("/category", summary="Browse a category", response_model=OperationResponse)
async def search_by_category(
    request: CategorySearchRequest, session: SearchSession = Depends(get_session)
) -> OperationResponse:
    filters = None
    if request.health is not None or request.diet is not None:
        filters = FilterSelection(health=request.health or [], diet=request.diet or [])
    result = await session.search_by_category(request.category, filters)
    return OperationResponse(outcome=_outcome(result), **_state(session))


@router.post("/terms", summary="Multi-ingredient search", response_model=OperationResponse)
async def search_by_terms(
    request: TermsSearchRequest, session: SearchSession = Depends(get_session)
) -> OperationResponse:
    result = await session.search_by_terms(request.terms)
    return OperationResponse(outcome=_outcome(result), **_state(session))


@router.post("/next", summary="Fetch the next page", response_model=OperationResponse)
async def fetch_next_page(session: SearchSession = Depends(get_session)) -> OperationResponse:
    result = await session.fetch_next_page()
    return OperationResponse(outcome=_outcome(result), **_state(session))


@router.post("/lookup", summary="Load recipes by URI", response_model=LookupResponse)
async def lookup_by_uri(
    request: LookupRequest, session: SearchSession = Depends(get_session)
) -> LookupResponse:
    results = await session.fetch_by_identifiers(request.uris)
    return LookupResponse(outcomes=[_outcome(r) for r in results], **_state(session))
