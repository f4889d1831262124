# foodprint/services/vision_inference.py
import base64
import io
import logging
from typing import Dict, Optional

from PIL import Image, UnidentifiedImageError

from ..config import ALLOWED_IMAGE_TYPES, get_max_image_bytes, get_vision_model
from ..errors import AppError, InferenceError
from ..schemas import VisionInferenceResponse
from .contract import select_vision_fallback, validate_vision_payload
from .groq_client import chat_completion, extract_json_object

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a culinary expert specializing in food image analysis for carbon "
    "footprint estimation. Always respond with valid JSON only."
)

IMAGE_PROMPT = """
Analyze this food image and identify the dish and its ingredients.

Return ONLY a JSON object in this exact format:
{
  "dish_name": "name of the dish",
  "ingredients": [
    {
      "name": "ingredient name",
      "estimated_quantity": "quantity with unit (e.g. '200g', '1 cup', '2 pieces')",
      "category": "one of: meat, seafood, dairy, vegetables, fruits, grains, legumes, nuts, oils, seasonings"
    }
  ],
  "confidence": 0.85
}

Guidelines:
- Name the dish if it is recognizable
- List visible ingredients with quantities estimated from the portion size
- Include likely hidden ingredients (oils, seasonings)
- confidence reflects how clearly the dish can be identified (0.3-0.95);
  use 0.2-0.4 if the image is unclear or not food
- Focus on ingredients with a large footprint (proteins, dairy, grains)
"""


def validate_image_upload(contents: bytes, content_type: Optional[str]) -> None:
    """Raise AppError unless the upload is a reasonably sized, decodable image."""
    if not contents:
        raise AppError("Image file is required", 400)
    if (content_type or "").lower() not in ALLOWED_IMAGE_TYPES:
        raise AppError("Invalid file type. Only JPEG, PNG, and WebP are allowed.", 400)
    max_bytes = get_max_image_bytes()
    if len(contents) > max_bytes:
        raise AppError(f"File size too large. Maximum {max_bytes // (1024 * 1024)}MB allowed.", 413)
    try:
        with Image.open(io.BytesIO(contents)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise AppError("Uploaded file is not a valid image", 400) from e


def to_data_url(image_bytes: bytes, mime_type: str) -> str:
    b64 = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{b64}"


async def request_image_ingredients(image_bytes: bytes, mime_type: str) -> Dict:
    text = await chat_completion(
        [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": IMAGE_PROMPT},
                    {"type": "image_url", "image_url": {"url": to_data_url(image_bytes, mime_type)}},
                ],
            },
        ],
        get_vision_model(),
        max_tokens=1500,
        temperature=0.3,
    )
    return extract_json_object(text)


async def analyze_image(image_bytes: bytes, mime_type: str) -> VisionInferenceResponse:
    """Dish name and ingredients seen in an image, or the generic canned answer."""
    try:
        payload = await request_image_ingredients(image_bytes, mime_type)
        response = validate_vision_payload(payload)
    except InferenceError as e:
        logger.warning("INFERENCE_FALLBACK path=image bytes=%d reason=%s: %s",
                       len(image_bytes), type(e).__name__, e)
        return select_vision_fallback()

    logger.info(
        "INFERENCE_OK path=image dish=%r ingredients=%d confidence=%s",
        response.dish_name, len(response.ingredients), response.confidence,
    )
    return response
