# foodprint/services/ingredient_inference.py
import logging
from typing import Dict

from ..config import get_text_model
from ..errors import InferenceError
from ..schemas import InferenceResponse
from .contract import select_text_fallback, validate_inference_payload
from .groq_client import chat_completion, extract_json_object

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a culinary expert specializing in ingredient analysis for carbon "
    "footprint estimation. Always respond with valid JSON only."
)


def build_dish_prompt(dish: str) -> str:
    return f"""
Analyze the dish "{dish}" and list the ingredients of one typical serving.

Return ONLY a JSON object in this exact format:
{{
  "ingredients": [
    {{
      "name": "ingredient name",
      "estimated_quantity": "quantity with unit (e.g. '200g', '1 cup', '2 pieces')",
      "category": "one of: meat, seafood, dairy, vegetables, fruits, grains, legumes, nuts, oils, seasonings"
    }}
  ],
  "confidence": 0.85
}}

Guidelines:
- Include proteins, carbs, vegetables, fats and seasonings (5-12 ingredients)
- Use specific names when possible ("chicken breast", not "chicken")
- Include cooking oils and spices
- confidence is 0.7-0.95 depending on how well-known the dish is
- For fusion or unclear dishes, make reasonable assumptions

Dish: "{dish}"
"""


async def request_dish_ingredients(dish: str) -> Dict:
    """Raw, unvalidated payload from the text model."""
    text = await chat_completion(
        [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_dish_prompt(dish)},
        ],
        get_text_model(),
        max_tokens=1000,
        temperature=0.3,
    )
    return extract_json_object(text)


async def analyze_dish(dish: str) -> InferenceResponse:
    """
    Likely ingredients of a dish. Never raises for model-side problems:
    a failed call or a malformed answer yields the canned response for
    the dish name instead.
    """
    try:
        payload = await request_dish_ingredients(dish)
        response = validate_inference_payload(payload)
    except InferenceError as e:
        fallback = select_text_fallback(dish)
        logger.warning(
            "INFERENCE_FALLBACK path=text dish=%r reason=%s: %s confidence=%s",
            dish, type(e).__name__, e, fallback.confidence,
        )
        return fallback

    logger.info(
        "INFERENCE_OK path=text dish=%r ingredients=%d confidence=%s",
        dish, len(response.ingredients), response.confidence,
    )
    return response
