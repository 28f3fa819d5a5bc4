"""Recipe search application layer.

Queries the Edamam Recipe Search API v2, follows its `_links.next.href`
continuation links and keeps the decoded results in an observable
`SearchSession` for a UI layer to render.
"""

from .client import DecodeFailure, EdamamClient, EdamamError, TransportFailure
from .config import Credentials, EdamamSettings, load_credentials, load_settings
from .filters import Category, Diet, FilterSelection, Health
from .models import Ingredient, Recipe, RecipeRecord, SearchPage
from .preferences import PreferenceStore
from .session import FetchResult, FetchStatus, SearchSession

__all__ = [
    "Category",
    "Credentials",
    "DecodeFailure",
    "Diet",
    "EdamamClient",
    "EdamamError",
    "EdamamSettings",
    "FetchResult",
    "FetchStatus",
    "FilterSelection",
    "Health",
    "Ingredient",
    "PreferenceStore",
    "Recipe",
    "RecipeRecord",
    "SearchPage",
    "SearchSession",
    "TransportFailure",
    "load_credentials",
    "load_settings",
]
