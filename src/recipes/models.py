"""Edamam Recipe Search API v2 response models.

Search/list endpoints respond with::

    {"hits": [{"recipe": {...}}, ...], "_links": {"next": {"href": "..."}}}

The "get by ID" endpoint responds with::

    {"recipe": {...}, "_links": {...}}
"""

from __future__ import annotations

from typing import List, Optional, Set
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class Ingredient(BaseModel):
    model_config = ConfigDict(extra="ignore")

    food: str
    text: Optional[str] = None
    quantity: Optional[float] = None
    measure: Optional[str] = None
    weight: Optional[float] = None


class Recipe(BaseModel):
    """Core recipe object. Only uri, label and image are guaranteed."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    uri: str = Field(..., description="Provider-canonical recipe URI (embeds the recipe id).")
    label: str
    image: str
    servings: Optional[float] = Field(None, alias="yield")
    calories: Optional[float] = None
    total_weight: Optional[float] = Field(None, alias="totalWeight")
    total_time_minutes: Optional[float] = Field(None, alias="totalTime")
    cautions: Optional[Set[str]] = None
    ingredients: Optional[List[Ingredient]] = None
    cuisine_types: Optional[List[str]] = Field(None, alias="cuisineType")
    meal_types: Optional[List[str]] = Field(None, alias="mealType")
    dish_types: Optional[List[str]] = Field(None, alias="dishType")
    source_url: Optional[str] = Field(None, alias="url")


class RecipeRecord(BaseModel):
    """A recipe plus a synthetic id for list identity (not the server id)."""

    id: UUID = Field(default_factory=uuid4)
    recipe: Recipe


class LinkHref(BaseModel):
    href: str


class Links(BaseModel):
    model_config = ConfigDict(extra="ignore")

    next: Optional[LinkHref] = None


class SearchPage(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    hits: List[RecipeRecord]
    links: Optional[Links] = Field(None, alias="_links")

    @property
    def next_link(self) -> Optional[str]:
        if self.links is None or self.links.next is None:
            return None
        return self.links.next.href or None


class RecipeLookup(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    recipe: Recipe
    links: Optional[Links] = Field(None, alias="_links")

    def to_record(self) -> RecipeRecord:
        return RecipeRecord(recipe=self.recipe)
