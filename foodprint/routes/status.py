import asyncio
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from ..config import API_VERSION, get_text_model, get_vision_model
from ..schemas import CarbonDataStats, HealthCheck, ServiceStatus
from ..services.groq_client import ping
from ..utils.carbon import get_carbon_data_stats

router = APIRouter()


@router.get("/health", response_model=HealthCheck)
async def health():
    llm_ok, vision_ok = await asyncio.gather(ping(get_text_model()), ping(get_vision_model()))
    check = HealthCheck(
        status="healthy" if llm_ok and vision_ok else "unhealthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=API_VERSION,
        services=ServiceStatus(llm=llm_ok, vision=vision_ok),
    )
    return JSONResponse(check.model_dump(), status_code=200 if check.status == "healthy" else 503)


@router.get("/carbon-data/stats", response_model=CarbonDataStats)
def carbon_data_stats():
    return CarbonDataStats(**get_carbon_data_stats())
