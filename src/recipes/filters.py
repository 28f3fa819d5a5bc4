from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Category(str, Enum):
    main_course = "main-course"
    salad = "salad"
    drinks = "drinks"
    dessert = "dessert"


# Dish types are lowercase phrases; the provider treats them case-insensitively.
DISH_TYPES: Dict[Category, str] = {
    Category.main_course: "main course",
    Category.salad: "salad",
    Category.drinks: "drinks",
    Category.dessert: "desserts",
}


def dish_type_for(category: Category) -> str:
    return DISH_TYPES[Category(category)]


class Health(str, Enum):
    alcohol_cocktail = "alcohol-cocktail"
    alcohol_free = "alcohol-free"
    celery_free = "celery-free"
    crustacean_free = "crustacean-free"
    dairy_free = "dairy-free"
    dash = "DASH"
    egg_free = "egg-free"
    fish_free = "fish-free"
    fodmap_free = "fodmap-free"
    gluten_free = "gluten-free"
    immuno_supportive = "immuno-supportive"
    keto_friendly = "keto-friendly"
    kidney_friendly = "kidney-friendly"
    kosher = "kosher"
    low_potassium = "low-potassium"
    low_sugar = "low-sugar"
    lupine_free = "lupine-free"
    mediterranean = "Mediterranean"
    mollusk_free = "mollusk-free"
    mustard_free = "mustard-free"
    no_oil_added = "No-oil-added"
    paleo = "paleo"
    peanut_free = "peanut-free"
    pescatarian = "pecatarian"  # sic, provider spelling
    pork_free = "pork-free"
    red_meat_free = "red-meat-free"
    sesame_free = "sesame-free"
    shellfish_free = "shellfish-free"
    soy_free = "soy-free"
    sugar_conscious = "sugar-conscious"
    sulfite_free = "sulfite-free"
    tree_nut_free = "tree-nut-free"
    vegan = "vegan"
    vegetarian = "vegetarian"
    wheat_free = "wheat-free"

    @property
    def label(self) -> str:
        return HEALTH_LABELS[self]


class Diet(str, Enum):
    balanced = "balanced"
    high_fiber = "high-fiber"
    high_protein = "high-protein"
    low_carb = "low-carb"
    low_fat = "low-fat"
    low_sodium = "low-sodium"

    @property
    def label(self) -> str:
        return DIET_LABELS[self]


HEALTH_LABELS: Dict[Health, str] = {
    Health.alcohol_cocktail: "Alcohol-Cocktail",
    Health.alcohol_free: "Alcohol-Free",
    Health.celery_free: "Celery-Free",
    Health.crustacean_free: "Crustacean-Free",
    Health.dairy_free: "Dairy-Free",
    Health.dash: "DASH",
    Health.egg_free: "Egg-Free",
    Health.fish_free: "Fish-Free",
    Health.fodmap_free: "FODMAP-Free",
    Health.gluten_free: "Gluten-Free",
    Health.immuno_supportive: "Immuno-Supportive",
    Health.keto_friendly: "Keto-Friendly",
    Health.kidney_friendly: "Kidney-Friendly",
    Health.kosher: "Kosher",
    Health.low_potassium: "Low Potassium",
    Health.low_sugar: "Low Sugar",
    Health.lupine_free: "Lupine-Free",
    Health.mediterranean: "Mediterranean",
    Health.mollusk_free: "Mollusk-Free",
    Health.mustard_free: "Mustard-Free",
    Health.no_oil_added: "No oil added",
    Health.paleo: "Paleo",
    Health.peanut_free: "Peanut-Free",
    Health.pescatarian: "Pescatarian",
    Health.pork_free: "Pork-Free",
    Health.red_meat_free: "Red-Meat-Free",
    Health.sesame_free: "Sesame-Free",
    Health.shellfish_free: "Shellfish-Free",
    Health.soy_free: "Soy-Free",
    Health.sugar_conscious: "Sugar-Conscious",
    Health.sulfite_free: "Sulfite-Free",
    Health.tree_nut_free: "Tree-Nut-Free",
    Health.vegan: "Vegan",
    Health.vegetarian: "Vegetarian",
    Health.wheat_free: "Wheat-Free",
}

DIET_LABELS: Dict[Diet, str] = {
    Diet.balanced: "Balanced",
    Diet.high_fiber: "High-Fiber",
    Diet.high_protein: "High-Protein",
    Diet.low_carb: "Low-Carb",
    Diet.low_fat: "Low-Fat",
    Diet.low_sodium: "Low-Sodium",
}

_HEALTH_BY_LABEL: Dict[str, Health] = {label: h for h, label in HEALTH_LABELS.items()}
_DIET_BY_LABEL: Dict[str, Diet] = {label: d for d, label in DIET_LABELS.items()}


def health_token(label: str) -> Optional[str]:
    """Provider token for a saved health label, or None if it is not known."""
    match = _HEALTH_BY_LABEL.get(label)
    return match.value if match else None


def diet_token(label: str) -> Optional[str]:
    match = _DIET_BY_LABEL.get(label)
    return match.value if match else None


@dataclass(frozen=True)
class FilterSelection:
    """Saved health/diet selections, stored as display labels."""

    health: List[str] = field(default_factory=list)
    diet: List[str] = field(default_factory=list)
