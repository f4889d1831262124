"""
Unit tests: free-text quantity -> kg.
Run: python -m pytest tests/test_quantity.py -v
"""
import pytest

from foodprint.utils.quantity import parse_quantity_to_kg


def test_grams():
    assert parse_quantity_to_kg("200g") == 0.2
    assert parse_quantity_to_kg("200 grams") == 0.2
    assert parse_quantity_to_kg("150 g") == 0.15
    assert parse_quantity_to_kg("100gm") == 0.1
    assert parse_quantity_to_kg("100 gms") == 0.1
    assert parse_quantity_to_kg("100gr") == 0.1
    assert parse_quantity_to_kg("250 grs") == 0.25


def test_kilograms_not_read_as_grams():
    assert parse_quantity_to_kg("1 kg") == 1.0
    assert parse_quantity_to_kg("1.5kg") == 1.5
    assert parse_quantity_to_kg("2 kilograms") == 2.0


def test_pounds_and_ounces():
    assert parse_quantity_to_kg("2 lb") == pytest.approx(0.907, abs=0.001)
    assert parse_quantity_to_kg("1 pound") == pytest.approx(0.453592)
    assert parse_quantity_to_kg("3 oz") == pytest.approx(0.0850485)


def test_kitchen_measures():
    assert parse_quantity_to_kg("1 cup") == pytest.approx(0.24)
    assert parse_quantity_to_kg("2 tbsp") == pytest.approx(0.03)
    assert parse_quantity_to_kg("1 teaspoon") == pytest.approx(0.005)


def test_size_words_ignore_the_number():
    assert parse_quantity_to_kg("medium") == 0.1
    assert parse_quantity_to_kg("1 small") == 0.05
    assert parse_quantity_to_kg("3 large") == 0.2
    assert parse_quantity_to_kg("1 medium egg") == 0.1


def test_pieces_and_items():
    assert parse_quantity_to_kg("2 pieces") == 0.1
    assert parse_quantity_to_kg("1 item") == 0.1


def test_no_unit_is_clamped_to_serving_band():
    assert parse_quantity_to_kg("3") == pytest.approx(0.3)
    assert parse_quantity_to_kg("20") == 0.5
    assert parse_quantity_to_kg("a pinch") == 0.05


@pytest.mark.parametrize("text", ["", "some", "to taste", "  "])
def test_no_signal_stays_in_band(text):
    kg = parse_quantity_to_kg(text)
    assert 0.05 <= kg <= 0.5


def test_never_zero():
    assert parse_quantity_to_kg("0g") > 0
    assert parse_quantity_to_kg("0") > 0
