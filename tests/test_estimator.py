"""
Unit tests: dish / image / batch orchestration.
Run: python -m pytest tests/test_estimator.py -v
"""
import asyncio
from unittest.mock import AsyncMock, patch

from foodprint.schemas import DishEstimate, FailedDishEstimate
from foodprint.services.contract import select_text_fallback
from foodprint.services.estimator import (
    BATCH_ITEM_ERROR,
    TEXT_METHODOLOGY,
    VISION_METHODOLOGY,
    estimate_batch,
    estimate_dish,
    estimate_image,
)


def test_estimate_dish_with_failed_inference_uses_pizza_fallback():
    est = asyncio.run(estimate_dish("Pizza Margherita"))
    assert est.dish == "Pizza Margherita"
    assert est.confidence == 0.75
    assert est.methodology == TEXT_METHODOLOGY
    assert [i.carbon_kg for i in est.ingredients] == [0.21, 1.35, 0.16, 0.08, 0.01]
    assert [i.category for i in est.ingredients] == ["grains", "dairy", "vegetables", "oils", "seasonings"]
    assert est.estimated_carbon_kg == 1.81


def test_estimate_dish_generic_fallback():
    est = asyncio.run(estimate_dish("Unicorn tears with dragon scales"))
    assert est.confidence == 0.5
    assert [i.category for i in est.ingredients] == ["unknown", "oils", "seasonings"]
    assert est.estimated_carbon_kg == 0.56


def test_estimate_image_uses_vision_dish_name(png_bytes):
    est = asyncio.run(estimate_image(png_bytes, "image/png"))
    assert est.dish == "Unknown Dish"
    assert est.methodology == VISION_METHODOLOGY
    assert est.confidence == 0.3


def test_batch_isolates_failures():
    async def fake_analyze(dish):
        if dish == "Broken dish":
            raise RuntimeError("boom")
        return select_text_fallback(dish)

    dishes = ["Pizza", "Broken dish", "  Burger  "]
    with patch("foodprint.services.estimator.analyze_dish", new=AsyncMock(side_effect=fake_analyze)):
        results = asyncio.run(estimate_batch(dishes))

    assert len(results) == 3
    assert isinstance(results[0], DishEstimate)
    assert results[0].confidence == 0.75

    failed = results[1]
    assert isinstance(failed, FailedDishEstimate)
    assert failed.dish == "Broken dish"
    assert failed.error == BATCH_ITEM_ERROR
    assert failed.estimated_carbon_kg == 0
    assert failed.ingredients == []
    assert failed.confidence == 0

    assert isinstance(results[2], DishEstimate)
    assert results[2].dish == "Burger"
    assert results[2].confidence == 0.8


def test_batch_runs_one_inference_per_dish():
    mock = AsyncMock(side_effect=lambda dish: select_text_fallback(dish))
    with patch("foodprint.services.estimator.analyze_dish", new=mock):
        results = asyncio.run(estimate_batch(["a", "b", "c", "d"]))
    assert mock.await_count == 4
    assert [r.dish for r in results] == ["a", "b", "c", "d"]
