"""
Unit tests: inference-response shape validation and canned fallbacks.
Run: python -m pytest tests/test_contract.py -v
"""
import pytest

from foodprint.errors import InferenceContractViolation
from foodprint.services.contract import (
    select_text_fallback,
    select_vision_fallback,
    validate_inference_payload,
    validate_vision_payload,
)


def _payload(**overrides):
    payload = {
        "ingredients": [
            {"name": "Chicken breast", "estimated_quantity": "150g", "category": "meat"},
            {"name": "Rice", "estimated_quantity": "1 cup", "category": "grains"},
        ],
        "confidence": 0.85,
    }
    payload.update(overrides)
    return payload


def test_valid_payload_accepted():
    resp = validate_inference_payload(_payload())
    assert resp.confidence == 0.85
    assert [i.name for i in resp.ingredients] == ["Chicken breast", "Rice"]


def test_empty_ingredient_list_is_valid():
    resp = validate_inference_payload(_payload(ingredients=[]))
    assert resp.ingredients == []


def test_extra_keys_are_ignored():
    resp = validate_inference_payload(_payload(notes="typical serving"))
    assert len(resp.ingredients) == 2


@pytest.mark.parametrize("payload", [
    None,
    [],
    "ingredients",
    {"confidence": 0.9},
    _payload(ingredients=None),
    _payload(ingredients="rice, beans"),
    _payload(ingredients=[{"name": "Rice", "estimated_quantity": "1 cup"}]),
    _payload(ingredients=[{"name": "", "estimated_quantity": "1 cup", "category": "grains"}]),
    _payload(ingredients=[{"name": "Rice", "estimated_quantity": 200, "category": "grains"}]),
    _payload(confidence=1.5),
    _payload(confidence=-0.1),
    _payload(confidence="0.8"),
    _payload(confidence=None),
])
def test_invalid_payload_rejected(payload):
    with pytest.raises(InferenceContractViolation):
        validate_inference_payload(payload)


def test_vision_payload_needs_dish_name():
    ok = validate_vision_payload(_payload(dish_name="Chicken Rice"))
    assert ok.dish_name == "Chicken Rice"
    with pytest.raises(InferenceContractViolation):
        validate_vision_payload(_payload())
    with pytest.raises(InferenceContractViolation):
        validate_vision_payload(_payload(dish_name=""))


def test_pizza_fallback():
    resp = select_text_fallback("Pizza Margherita")
    assert resp.confidence == 0.75
    assert resp.ingredients[0].name == "wheat flour"
    assert len(resp.ingredients) == 5


def test_burger_and_pasta_fallbacks():
    assert select_text_fallback("Double Cheese Burger").confidence == 0.8
    assert select_text_fallback("pasta carbonara").confidence == 0.7


def test_fallback_check_order():
    # pizza is checked before pasta
    assert select_text_fallback("pasta pizza").confidence == 0.75


def test_generic_fallback():
    resp = select_text_fallback("Unicorn tears with dragon scales")
    assert resp.confidence == 0.5
    assert [i.name for i in resp.ingredients] == ["mixed ingredients", "cooking oil", "seasonings"]


def test_fallback_returns_fresh_copies():
    first = select_text_fallback("pizza")
    first.ingredients.clear()
    assert len(select_text_fallback("pizza").ingredients) == 5


def test_vision_fallback():
    resp = select_vision_fallback()
    assert resp.dish_name == "Unknown Dish"
    assert resp.confidence == 0.3
    assert len(resp.ingredients) == 3
