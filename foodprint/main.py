import logging
from datetime import datetime, timezone

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from .config import API_VERSION, get_allowed_origins, get_log_level, log_config  # noqa: E402
from .errors import register_error_handlers  # noqa: E402
from .routes.estimate import router as estimate_router  # noqa: E402
from .routes.status import router as status_router  # noqa: E402

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Foodprint AI - Carbon Estimator (FastAPI)", version=API_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)
register_error_handlers(app)

app.include_router(estimate_router, prefix="/estimate")
app.include_router(status_router)

log_config()


@app.get("/")
def root():
    return {
        "name": "Foodprint AI - Carbon Estimator",
        "version": API_VERSION,
        "description": "Estimates the carbon footprint of a dish from its name or a photo",
        "endpoints": {
            "POST /estimate": "Estimate carbon footprint from dish name",
            "POST /estimate/image": "Estimate carbon footprint from image",
            "POST /estimate/batch": "Batch estimate multiple dishes",
            "GET /health": "Health check",
            "GET /carbon-data/stats": "Carbon data statistics",
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
