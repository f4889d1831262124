# foodprint/schemas.py
from typing import Annotated, List, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, StringConstraints

from .config import MAX_DISH_NAME_LENGTH

NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]
Confidence = Annotated[float, Field(ge=0.0, le=1.0, strict=True)]
DishName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_DISH_NAME_LENGTH)
]


# ---- inference contract ---------------------------------------------------

class RawIngredient(BaseModel):
    """One ingredient as guessed by the model; untrusted until resolved."""
    name: NonEmptyStr
    estimated_quantity: NonEmptyStr
    category: NonEmptyStr


class InferenceResponse(BaseModel):
    ingredients: List[RawIngredient]
    confidence: Confidence


class VisionInferenceResponse(InferenceResponse):
    dish_name: NonEmptyStr


# ---- engine output --------------------------------------------------------

class ResolvedIngredient(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    carbon_kg: float = Field(ge=0.0)
    quantity: str
    category: str


class DishEstimate(BaseModel):
    model_config = ConfigDict(frozen=True)

    dish: str
    estimated_carbon_kg: float = Field(ge=0.0)
    ingredients: List[ResolvedIngredient]
    confidence: float = Field(ge=0.0, le=1.0)
    methodology: str


class FailedDishEstimate(BaseModel):
    dish: str
    error: str
    estimated_carbon_kg: float = 0.0
    ingredients: List[ResolvedIngredient] = []
    confidence: float = 0.0


# ---- HTTP bodies ----------------------------------------------------------

class DishRequest(BaseModel):
    dish: DishName


class BatchRequest(BaseModel):
    dishes: List[StrictStr]


class BatchResponse(BaseModel):
    estimates: List[Union[DishEstimate, FailedDishEstimate]]


class CarbonDataStats(BaseModel):
    totalIngredients: int
    categories: List[str]


class ServiceStatus(BaseModel):
    llm: bool
    vision: bool


class HealthCheck(BaseModel):
    status: str
    timestamp: str
    version: str
    services: ServiceStatus
