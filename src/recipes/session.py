from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .client import EdamamClient, EdamamError, redact_url
from .config import Credentials
from .filters import Category, FilterSelection, dish_type_for
from .models import RecipeRecord, SearchPage
from .preferences import PreferenceStore
from .query import build_lookup_url, build_search_url, extract_recipe_id, join_terms

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    applied = "applied"
    skipped = "skipped"
    failed = "failed"
    stale = "stale"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one session operation.

    `failed` means the request or decode went wrong and state was left
    untouched; `stale` means a newer search started before the response
    arrived, so it was discarded.
    """

    status: FetchStatus
    url: Optional[str] = None
    added: int = 0
    reason: Optional[str] = None
    error: Optional[EdamamError] = None

    @property
    def ok(self) -> bool:
        return self.status in (FetchStatus.applied, FetchStatus.skipped)


Listener = Callable[["SearchSession"], None]


class SearchSession:
    """Holds the current recipe result list and the next-page link.

    All coroutines must be awaited on the event loop that owns the session;
    state is only mutated there, after the awaited HTTP call resumes.

    Each new search (reset, category, text, terms, identifiers) advances
    `generation`. A response is applied only if the generation it was issued
    under is still current, so a slow response from an older search can never
    overwrite or interleave with a newer one.
    """

    def __init__(
        self,
        client: EdamamClient,
        credentials: Credentials | None = None,
        *,
        preferences: PreferenceStore | None = None,
    ) -> None:
        self.client = client
        self.settings = client.settings
        self.credentials = credentials or Credentials()
        self.preferences = preferences

        self._results: List[RecipeRecord] = []
        self._continuation: Optional[str] = None
        self._generation = 0
        self._next_in_flight: Optional[str] = None
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------
    @property
    def results(self) -> List[RecipeRecord]:
        return list(self._results)

    @property
    def continuation(self) -> Optional[str]:
        return self._continuation

    @property
    def has_more(self) -> bool:
        return self._continuation is not None

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call `listener(session)` after every state change. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self._generation += 1
        self._clear()

    async def search_by_category(
        self, category: Category, filters: FilterSelection | None = None
    ) -> FetchResult:
        if filters is None:
            filters = self._saved_filters()
        url = build_search_url(
            self.settings,
            self.credentials,
            dish_type=dish_type_for(category),
            health=filters.health,
            diet=filters.diet,
        )
        return await self._request_page(url, replace=True, generation=self._begin_search())

    async def search_by_text(self, query: str) -> FetchResult:
        trimmed = (query or "").strip()
        if not trimmed:
            return FetchResult(FetchStatus.skipped, reason="blank query")

        filters = self._saved_filters()
        url = build_search_url(
            self.settings,
            self.credentials,
            query=trimmed,
            health=filters.health,
            diet=filters.diet,
        )
        return await self._request_page(url, replace=True, generation=self._begin_search())

    async def search_by_terms(self, terms: Iterable[str]) -> FetchResult:
        query = join_terms(terms)
        if query is None:
            return FetchResult(FetchStatus.skipped, reason="no terms")

        filters = self._saved_filters()
        url = build_search_url(
            self.settings,
            self.credentials,
            query=query,
            health=filters.health,
            diet=filters.diet,
        )
        # Accumulates onto the current list.
        return await self._request_page(url, replace=False, generation=self._begin_search())

    async def fetch_next_page(self) -> FetchResult:
        url = self._continuation
        if url is None:
            return FetchResult(FetchStatus.skipped, reason="no next page")
        if url == self._next_in_flight:
            return FetchResult(FetchStatus.skipped, url=url, reason="next page already requested")

        self._next_in_flight = url
        try:
            return await self._request_page(url, replace=False, generation=self._generation)
        finally:
            if self._next_in_flight == url:
                self._next_in_flight = None

    async def fetch_by_identifiers(self, uris: Iterable[str]) -> List[FetchResult]:
        """Load recipes by provider URI, one lookup per id.

        State is cleared once up front. Records are appended as responses
        arrive, so their order is arrival order, not input order. The
        returned results follow input order.
        """
        generation = self._begin_search()
        self._clear()

        outcomes: Dict[int, FetchResult] = {}
        lookups: List[Tuple[int, str]] = []
        for index, uri in enumerate(uris):
            recipe_id = extract_recipe_id(uri)
            if recipe_id is None:
                logger.warning("Invalid URI format: %s", uri)
                outcomes[index] = FetchResult(FetchStatus.skipped, reason=f"no recipe id in {uri!r}")
                continue
            lookups.append((index, build_lookup_url(self.settings, self.credentials, recipe_id)))

        sem = asyncio.Semaphore(self.settings.max_concurrency)

        async def lookup(index: int, url: str) -> Tuple[int, str, Optional[RecipeRecord], Optional[EdamamError]]:
            async with sem:
                try:
                    return index, url, await self.client.get_recipe(url), None
                except EdamamError as e:
                    return index, url, None, e

        tasks = [asyncio.create_task(lookup(index, url)) for index, url in lookups]
        try:
            for coro in asyncio.as_completed(tasks):
                index, url, record, error = await coro
                if error is not None:
                    logger.error("Recipe lookup failed for %s: %s", redact_url(url), error)
                    outcomes[index] = FetchResult(FetchStatus.failed, url=url, error=error)
                elif generation != self._generation:
                    outcomes[index] = FetchResult(FetchStatus.stale, url=url)
                else:
                    self._results.append(record)
                    self._notify()
                    outcomes[index] = FetchResult(FetchStatus.applied, url=url, added=1)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

        return [outcomes[i] for i in sorted(outcomes)]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _begin_search(self) -> int:
        self._generation += 1
        return self._generation

    def _clear(self) -> None:
        self._results = []
        self._continuation = None
        self._notify()

    def _saved_filters(self) -> FilterSelection:
        if self.preferences is None:
            return FilterSelection()
        return self.preferences.selection()

    async def _request_page(self, url: str, *, replace: bool, generation: int) -> FetchResult:
        try:
            page = await self.client.get_page(url)
        except EdamamError as e:
            logger.error("Search request failed for %s: %s", redact_url(url), e)
            return FetchResult(FetchStatus.failed, url=url, error=e)

        if generation != self._generation:
            logger.info("Discarding stale page for %s", redact_url(url))
            return FetchResult(FetchStatus.stale, url=url)

        self._apply_page(page, replace=replace)
        return FetchResult(FetchStatus.applied, url=url, added=len(page.hits))

    def _apply_page(self, page: SearchPage, *, replace: bool) -> None:
        if replace:
            self._results = list(page.hits)
        else:
            self._results.extend(page.hits)
        self._continuation = page.next_link
        self._notify()
