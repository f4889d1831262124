# foodprint/utils/quantity.py
import re
from decimal import Decimal
from typing import NamedTuple, Optional, Tuple

# assumed amount when the text carries no number at all (100g)
DEFAULT_AMOUNT = 0.1

# unit-less numbers are read as an informal serving scalar
SERVING_SCALE = 0.1
MIN_SERVING_KG = 0.05
MAX_SERVING_KG = 0.5

_NUMBER_RE = re.compile(r"(\d+(?:\.\d+)?)")


class UnitRule(NamedTuple):
    pattern: re.Pattern
    kg: float
    fixed: bool = False  # True: ignore the extracted number


# Order matters: kilograms before grams so "kg" is never read as "g".
UNIT_RULES: Tuple[UnitRule, ...] = (
    UnitRule(re.compile(r"kg|kilogram"), 1.0),
    UnitRule(re.compile(r"gram|\d\s*(?:gms?|grs?|g)\b"), 0.001),
    UnitRule(re.compile(r"lb|pound"), 0.453592),
    UnitRule(re.compile(r"oz|ounce"), 0.0283495),
    UnitRule(re.compile(r"cup"), 0.24),
    UnitRule(re.compile(r"tbsp|tablespoon"), 0.015),
    UnitRule(re.compile(r"tsp|teaspoon"), 0.005),
    UnitRule(re.compile(r"small"), 0.05, fixed=True),
    UnitRule(re.compile(r"medium"), 0.1, fixed=True),
    UnitRule(re.compile(r"large"), 0.2, fixed=True),
    UnitRule(re.compile(r"piece|item"), 0.1, fixed=True),
)


def extract_amount(text: str) -> Optional[float]:
    m = _NUMBER_RE.search(text)
    return float(m.group(1)) if m else None


def parse_quantity_to_kg(quantity: str) -> float:
    """
    Estimate the mass in kg described by a free-text quantity
    ("200g", "1 cup", "2 pieces", "a pinch"). Never fails and never
    returns zero or less.
    """
    text = (quantity or "").lower()
    amount = extract_amount(text)
    if amount is None:
        amount = DEFAULT_AMOUNT

    for rule in UNIT_RULES:
        if rule.pattern.search(text):
            kg = rule.kg if rule.fixed else float(Decimal(str(amount)) * Decimal(str(rule.kg)))
            if kg > 0:
                return kg
            break

    return max(MIN_SERVING_KG, min(amount * SERVING_SCALE, MAX_SERVING_KG))
