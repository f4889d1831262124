# foodprint/utils/carbon.py
import logging
import re
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Tuple

from ..schemas import RawIngredient, ResolvedIngredient
from .quantity import parse_quantity_to_kg

logger = logging.getLogger(__name__)


class EmissionsFactor(NamedTuple):
    carbon_per_kg: float
    category: str


# kg CO2e per kg of ingredient. Declaration order is the tie-break for
# partial matches, so new entries must be placed with care.
EMISSIONS_TABLE: Tuple[Tuple[str, EmissionsFactor], ...] = (
    # proteins
    ("beef", EmissionsFactor(60.0, "meat")),
    ("lamb", EmissionsFactor(39.2, "meat")),
    ("pork", EmissionsFactor(12.1, "meat")),
    ("chicken", EmissionsFactor(6.9, "meat")),
    ("turkey", EmissionsFactor(10.9, "meat")),
    ("fish", EmissionsFactor(6.1, "seafood")),
    ("salmon", EmissionsFactor(11.9, "seafood")),
    ("tuna", EmissionsFactor(6.1, "seafood")),
    ("shrimp", EmissionsFactor(18.2, "seafood")),
    ("eggs", EmissionsFactor(4.2, "dairy")),
    ("cheese", EmissionsFactor(13.5, "dairy")),
    ("milk", EmissionsFactor(3.2, "dairy")),
    ("yogurt", EmissionsFactor(2.2, "dairy")),
    ("butter", EmissionsFactor(23.8, "dairy")),
    # grains & starches
    ("rice", EmissionsFactor(2.7, "grains")),
    ("wheat", EmissionsFactor(1.4, "grains")),
    ("bread", EmissionsFactor(1.6, "grains")),
    ("pasta", EmissionsFactor(1.4, "grains")),
    ("potatoes", EmissionsFactor(0.5, "vegetables")),
    ("quinoa", EmissionsFactor(1.8, "grains")),
    ("oats", EmissionsFactor(1.6, "grains")),
    # vegetables
    ("tomatoes", EmissionsFactor(2.1, "vegetables")),
    ("onions", EmissionsFactor(0.5, "vegetables")),
    ("carrots", EmissionsFactor(0.4, "vegetables")),
    ("broccoli", EmissionsFactor(4.0, "vegetables")),
    ("spinach", EmissionsFactor(2.0, "vegetables")),
    ("lettuce", EmissionsFactor(1.3, "vegetables")),
    ("bell peppers", EmissionsFactor(2.8, "vegetables")),
    ("mushrooms", EmissionsFactor(3.3, "vegetables")),
    # legumes & nuts
    ("beans", EmissionsFactor(2.0, "legumes")),
    ("lentils", EmissionsFactor(0.9, "legumes")),
    ("chickpeas", EmissionsFactor(1.0, "legumes")),
    ("almonds", EmissionsFactor(8.8, "nuts")),
    ("peanuts", EmissionsFactor(3.2, "nuts")),
    # oils & fats
    ("olive oil", EmissionsFactor(5.4, "oils")),
    ("vegetable oil", EmissionsFactor(3.8, "oils")),
    ("coconut oil", EmissionsFactor(6.4, "oils")),
    # spices & others
    ("spices", EmissionsFactor(2.0, "seasonings")),
    ("herbs", EmissionsFactor(1.5, "seasonings")),
    ("garlic", EmissionsFactor(0.6, "seasonings")),
    ("ginger", EmissionsFactor(0.8, "seasonings")),
    ("sugar", EmissionsFactor(1.8, "sweeteners")),
    ("honey", EmissionsFactor(1.4, "sweeteners")),
    # fruits
    ("apples", EmissionsFactor(0.4, "fruits")),
    ("bananas", EmissionsFactor(0.7, "fruits")),
    ("oranges", EmissionsFactor(0.4, "fruits")),
    ("lemons", EmissionsFactor(0.5, "fruits")),
    ("coconut", EmissionsFactor(1.7, "fruits")),
)

EMISSIONS_PER_KG = MappingProxyType(dict(EMISSIONS_TABLE))

# Checked in order; the first category with a keyword inside the key wins.
CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("meat", ("meat", "beef", "pork", "lamb", "chicken", "turkey", "duck", "bacon", "ham", "sausage")),
    ("seafood", ("fish", "salmon", "tuna", "cod", "shrimp", "crab", "lobster", "seafood", "anchovy")),
    ("dairy", ("milk", "cheese", "yogurt", "cream", "butter", "dairy")),
    ("vegetables", ("vegetable", "carrot", "broccoli", "spinach", "lettuce", "tomato", "onion", "pepper", "cucumber")),
    ("fruits", ("fruit", "apple", "banana", "orange", "berry", "grape", "mango", "pineapple")),
    ("grains", ("rice", "wheat", "bread", "pasta", "cereal", "oat", "barley", "quinoa")),
    ("legumes", ("bean", "lentil", "pea", "chickpea", "soy")),
    ("nuts", ("nut", "almond", "walnut", "peanut", "cashew", "pecan")),
    ("oils", ("oil", "fat", "lard")),
    ("seasonings", ("spice", "herb", "salt", "pepper", "garlic", "ginger", "seasoning")),
)

CATEGORY_FALLBACKS = MappingProxyType({
    "meat": 15.0,
    "seafood": 8.0,
    "dairy": 8.0,
    "vegetables": 2.0,
    "fruits": 0.6,
    "grains": 1.5,
    "legumes": 1.5,
    "nuts": 6.0,
    "oils": 4.5,
    "seasonings": 1.8,
})

# average food footprint when nothing else is known
DEFAULT_FACTOR = EmissionsFactor(2.5, "unknown")

_TWO_PLACES = Decimal("0.01")
_NON_LETTERS = re.compile(r"[^a-z\s]")


def normalize_ingredient_name(name: str) -> str:
    """
    Canonicalize a raw ingredient name into a lookup key.
    Lower-case, drop one trailing "s", strip everything but letters and
    whitespace, then trim. May return "" for names without letters.
    """
    key = (name or "").lower()
    if key.endswith("s"):
        key = key[:-1]
    key = _NON_LETTERS.sub("", key)
    return key.strip()


def infer_category(text: str) -> Optional[str]:
    if not text:
        return None
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return None


def _category_from_hint(hint: str) -> Optional[str]:
    hint = (hint or "").strip().lower()
    if hint in CATEGORY_FALLBACKS:
        return hint
    return infer_category(hint)


def _match_exact(key: str, hint: str) -> Optional[EmissionsFactor]:
    if not key:
        return None
    return EMISSIONS_PER_KG.get(key)


def _match_partial(key: str, hint: str) -> Optional[EmissionsFactor]:
    if not key:
        return None
    for table_key, factor in EMISSIONS_TABLE:
        if table_key in key or key in table_key:
            return factor
    return None


def _match_category(key: str, hint: str) -> Optional[EmissionsFactor]:
    category = infer_category(key) or _category_from_hint(hint)
    if category and category in CATEGORY_FALLBACKS:
        return EmissionsFactor(CATEGORY_FALLBACKS[category], category)
    return None


Resolver = Callable[[str, str], Optional[EmissionsFactor]]

RESOLUTION_RULES: Tuple[Tuple[str, Resolver], ...] = (
    ("exact", _match_exact),
    ("partial", _match_partial),
    ("category", _match_category),
)


def resolve_factor_with_tier(key: str, category_hint: str = "") -> Tuple[str, EmissionsFactor]:
    for tier, resolver in RESOLUTION_RULES:
        factor = resolver(key, category_hint)
        if factor is not None:
            return tier, factor
    return "default", DEFAULT_FACTOR


def resolve_factor(key: str, category_hint: str = "") -> EmissionsFactor:
    """Walk the resolution chain; always returns a usable factor."""
    return resolve_factor_with_tier(key, category_hint)[1]


def round2(value) -> float:
    """Half-up rounding to two decimal places."""
    return float(Decimal(str(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def carbon_for(factor: EmissionsFactor, mass_kg: float) -> float:
    product = Decimal(str(factor.carbon_per_kg)) * Decimal(str(mass_kg))
    return max(0.0, round2(product))


def total_carbon(carbon_values: Iterable[float]) -> float:
    # sums the already-rounded per-ingredient values, then rounds again
    return round2(sum((Decimal(str(c)) for c in carbon_values), Decimal("0")))


def resolve_ingredient(ingredient: RawIngredient) -> ResolvedIngredient:
    """RawIngredient -> ResolvedIngredient."""
    key = normalize_ingredient_name(ingredient.name)
    tier, factor = resolve_factor_with_tier(key, ingredient.category)
    mass_kg = parse_quantity_to_kg(ingredient.estimated_quantity)
    carbon = carbon_for(factor, mass_kg)
    logger.debug(
        "RESOLVE name=%r key=%r tier=%s category=%s per_kg=%s mass_kg=%s carbon_kg=%s",
        ingredient.name, key, tier, factor.category, factor.carbon_per_kg, mass_kg, carbon,
    )
    return ResolvedIngredient(
        name=ingredient.name,
        carbon_kg=carbon,
        quantity=ingredient.estimated_quantity,
        category=factor.category,
    )


def estimate_carbon(ingredients: List[RawIngredient]) -> Tuple[List[ResolvedIngredient], float]:
    """
    Input: list of RawIngredient
    Output: (resolved_ingredients, total_carbon_kg), input order preserved
    """
    resolved = [resolve_ingredient(ing) for ing in ingredients]
    return resolved, total_carbon(r.carbon_kg for r in resolved)


def get_carbon_data_stats() -> Dict:
    categories: List[str] = []
    for _, factor in EMISSIONS_TABLE:
        if factor.category not in categories:
            categories.append(factor.category)
    return {"totalIngredients": len(EMISSIONS_TABLE), "categories": categories}
