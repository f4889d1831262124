from fastapi import APIRouter, File, UploadFile

from ..config import MAX_DISH_NAME_LENGTH, get_max_batch_dishes, get_max_image_bytes
from ..errors import AppError
from ..schemas import BatchRequest, BatchResponse, DishEstimate, DishRequest
from ..services.estimator import estimate_batch, estimate_dish, estimate_image
from ..services.vision_inference import validate_image_upload

router = APIRouter()


@router.post("", response_model=DishEstimate)
async def estimate_from_dish(payload: DishRequest):
    # DishRequest has already trimmed and length-checked the name
    return await estimate_dish(payload.dish)


@router.post("/image", response_model=DishEstimate)
async def estimate_from_image(image: UploadFile = File(...)):
    # one byte past the cap is enough to reject an oversized upload
    contents = await image.read(get_max_image_bytes() + 1)
    validate_image_upload(contents, image.content_type)
    return await estimate_image(contents, image.content_type)


@router.post("/batch", response_model=BatchResponse)
async def estimate_from_batch(payload: BatchRequest):
    dishes = payload.dishes
    if not dishes:
        raise AppError("Dishes array is required and cannot be empty", 400)
    max_dishes = get_max_batch_dishes()
    if len(dishes) > max_dishes:
        raise AppError(f"Maximum {max_dishes} dishes allowed per batch request", 400)
    if any(not d.strip() for d in dishes):
        raise AppError("Each dish must be a non-empty string", 400)
    if any(len(d.strip()) > MAX_DISH_NAME_LENGTH for d in dishes):
        raise AppError(f"Each dish name must be at most {MAX_DISH_NAME_LENGTH} characters", 400)

    return BatchResponse(estimates=await estimate_batch(dishes))
