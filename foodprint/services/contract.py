"""
Inference-response contract: shape validation of what the model returns,
and the canned responses used when that shape is wrong or the call failed.

Validation and fallback selection are kept apart so either can be checked
on its own.
"""
from typing import Any, Tuple

from pydantic import ValidationError

from ..errors import InferenceContractViolation
from ..schemas import InferenceResponse, RawIngredient, VisionInferenceResponse


def _ing(name: str, quantity: str, category: str) -> RawIngredient:
    return RawIngredient(name=name, estimated_quantity=quantity, category=category)


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"{exc.error_count()} error(s), first at {loc or '<root>'}: {first.get('msg')}"


def validate_inference_payload(payload: Any) -> InferenceResponse:
    if not isinstance(payload, dict):
        raise InferenceContractViolation("Invalid response format")
    try:
        return InferenceResponse.model_validate(payload)
    except ValidationError as e:
        raise InferenceContractViolation(_describe(e)) from e


def validate_vision_payload(payload: Any) -> VisionInferenceResponse:
    if not isinstance(payload, dict):
        raise InferenceContractViolation("Invalid response format")
    try:
        return VisionInferenceResponse.model_validate(payload)
    except ValidationError as e:
        raise InferenceContractViolation(_describe(e)) from e


# (pattern, canned response); first pattern found in the dish name wins
FALLBACK_RULES: Tuple[Tuple[str, InferenceResponse], ...] = (
    ("pizza", InferenceResponse(
        ingredients=[
            _ing("wheat flour", "150g", "grains"),
            _ing("mozzarella cheese", "100g", "dairy"),
            _ing("tomato sauce", "80g", "vegetables"),
            _ing("olive oil", "15g", "oils"),
            _ing("herbs", "5g", "seasonings"),
        ],
        confidence=0.75,
    )),
    ("burger", InferenceResponse(
        ingredients=[
            _ing("beef", "150g", "meat"),
            _ing("bread", "80g", "grains"),
            _ing("cheese", "30g", "dairy"),
            _ing("lettuce", "20g", "vegetables"),
            _ing("tomatoes", "30g", "vegetables"),
            _ing("onions", "15g", "vegetables"),
        ],
        confidence=0.8,
    )),
    ("pasta", InferenceResponse(
        ingredients=[
            _ing("pasta", "100g", "grains"),
            _ing("tomato sauce", "120g", "vegetables"),
            _ing("olive oil", "15g", "oils"),
            _ing("garlic", "5g", "seasonings"),
            _ing("herbs", "3g", "seasonings"),
        ],
        confidence=0.7,
    )),
)

_GENERIC_INGREDIENTS = (
    ("mixed ingredients", "200g", "unknown"),
    ("cooking oil", "10g", "oils"),
    ("seasonings", "5g", "seasonings"),
)

GENERIC_FALLBACK = InferenceResponse(
    ingredients=[_ing(*i) for i in _GENERIC_INGREDIENTS],
    confidence=0.5,
)

VISION_FALLBACK = VisionInferenceResponse(
    dish_name="Unknown Dish",
    ingredients=[_ing(*i) for i in _GENERIC_INGREDIENTS],
    confidence=0.3,
)


def select_text_fallback(dish_name: str) -> InferenceResponse:
    """Canned response for a dish name; always returns a fresh copy."""
    normalized = (dish_name or "").lower()
    for pattern, response in FALLBACK_RULES:
        if pattern in normalized:
            return response.model_copy(deep=True)
    return GENERIC_FALLBACK.model_copy(deep=True)


def select_vision_fallback() -> VisionInferenceResponse:
    return VISION_FALLBACK.model_copy(deep=True)
