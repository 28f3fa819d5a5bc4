from __future__ import annotations

from typing import Iterable, List, Optional, Tuple
from urllib.parse import quote

import httpx

from .config import Credentials, EdamamSettings
from .filters import diet_token, health_token


def _required_params(settings: EdamamSettings, credentials: Credentials) -> List[Tuple[str, str]]:
    return [
        ("type", settings.api_type),
        ("app_id", credentials.app_id),
        ("app_key", credentials.app_key),
    ]


def build_search_url(
    settings: EdamamSettings,
    credentials: Credentials,
    *,
    query: Optional[str] = None,
    dish_type: Optional[str] = None,
    health: Iterable[str] = (),
    diet: Iterable[str] = (),
) -> str:
    """Build a percent-encoded search URL.

    `q` and `dishType` are only included when non-empty. Health and diet
    labels are translated to provider tokens; unknown labels are dropped.
    """
    params = _required_params(settings, credentials)

    if query:
        params.append(("q", query))
    if dish_type:
        params.append(("dishType", dish_type))

    for label in health:
        token = health_token(label)
        if token:
            params.append(("health", token))
    for label in diet:
        token = diet_token(label)
        if token:
            params.append(("diet", token))

    return str(httpx.URL(settings.base_url, params=params))


def build_lookup_url(settings: EdamamSettings, credentials: Credentials, recipe_id: str) -> str:
    """Build the "get by ID" URL: <base>/<id>?type=...&app_id=...&app_key=..."""
    path = f"{settings.base_url}/{quote(recipe_id, safe='')}"
    return str(httpx.URL(path, params=_required_params(settings, credentials)))


def extract_recipe_id(uri: str) -> Optional[str]:
    """Return the id segment after the last underscore of a recipe URI.

    Example: "http://www.edamam.com/ontologies/edamam.owl#recipe_abc123" -> "abc123"
    """
    if not uri or "_" not in uri:
        return None
    recipe_id = uri.rsplit("_", 1)[1]
    return recipe_id or None


def join_terms(terms: Iterable[str]) -> Optional[str]:
    """Trim terms, drop empties and join with ", "; None if nothing is left."""
    clean_terms = [t.strip() for t in terms if t and t.strip()]
    if not clean_terms:
        return None
    return ", ".join(clean_terms)
