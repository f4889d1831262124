# foodprint/services/estimator.py
import asyncio
import logging
from typing import List, Union

from ..schemas import DishEstimate, FailedDishEstimate, InferenceResponse
from ..utils.carbon import estimate_carbon
from .ingredient_inference import analyze_dish
from .vision_inference import analyze_image

logger = logging.getLogger(__name__)

TEXT_METHODOLOGY = "LLM ingredient inference + carbon database lookup"
VISION_METHODOLOGY = "Computer vision analysis + carbon database lookup"
BATCH_ITEM_ERROR = "Failed to process dish"


def build_estimate(dish: str, response: InferenceResponse, methodology: str) -> DishEstimate:
    ingredients, total = estimate_carbon(response.ingredients)
    return DishEstimate(
        dish=dish,
        estimated_carbon_kg=total,
        ingredients=ingredients,
        confidence=response.confidence,
        methodology=methodology,
    )


async def estimate_dish(dish: str) -> DishEstimate:
    response = await analyze_dish(dish)
    estimate = build_estimate(dish, response, TEXT_METHODOLOGY)
    logger.info("ESTIMATE dish=%r total_kg=%s ingredients=%d",
                dish, estimate.estimated_carbon_kg, len(estimate.ingredients))
    return estimate


async def estimate_image(image_bytes: bytes, mime_type: str) -> DishEstimate:
    response = await analyze_image(image_bytes, mime_type)
    estimate = build_estimate(response.dish_name, response, VISION_METHODOLOGY)
    logger.info("ESTIMATE image dish=%r total_kg=%s ingredients=%d",
                estimate.dish, estimate.estimated_carbon_kg, len(estimate.ingredients))
    return estimate


async def estimate_batch(dishes: List[str]) -> List[Union[DishEstimate, FailedDishEstimate]]:
    """
    One inference call per dish, all in flight at once. A dish that fails
    is reported in place with zero carbon; the rest are unaffected.
    """
    names = [d.strip() for d in dishes]
    results = await asyncio.gather(*(estimate_dish(name) for name in names), return_exceptions=True)

    estimates: List[Union[DishEstimate, FailedDishEstimate]] = []
    for name, result in zip(names, results):
        if isinstance(result, BaseException) and not isinstance(result, Exception):
            raise result
        if isinstance(result, Exception):
            logger.warning("BATCH_ITEM_FAILED dish=%r error=%s: %s", name, type(result).__name__, result)
            estimates.append(FailedDishEstimate(dish=name, error=BATCH_ITEM_ERROR))
        else:
            estimates.append(result)
    return estimates
