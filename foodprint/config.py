"""
Centralized configuration. Values are read from the environment lazily so
that a .env loaded at startup (or a monkeypatched env in tests) is honoured.
"""
import logging
import os
from typing import List

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

MAX_DISH_NAME_LENGTH = 200
ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")


# --- Groq ---
def get_groq_api_key() -> str:
    return os.environ.get("GROQ_API_KEY", "").strip()


def get_text_model() -> str:
    return os.environ.get("GROQ_TEXT_MODEL", "llama-3.1-8b-instant")


def get_vision_model() -> str:
    return os.environ.get("GROQ_VISION_MODEL", "meta-llama/llama-4-scout-17b-16e-instruct")


def get_llm_timeout() -> float:
    return float(os.environ.get("LLM_TIMEOUT", "30"))


# --- Request limits ---
def get_max_image_bytes() -> int:
    return int(os.environ.get("MAX_IMAGE_BYTES", str(10 * 1024 * 1024)))


def get_max_batch_dishes() -> int:
    return int(os.environ.get("MAX_BATCH_DISHES", "10"))


# --- HTTP ---
def get_allowed_origins() -> List[str]:
    raw = os.environ.get("ALLOWED_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()


def log_config() -> None:
    logger.info(
        "CONFIG: groq_key=%s text_model=%s vision_model=%s llm_timeout=%ss "
        "max_image_bytes=%d max_batch=%d origins=%s",
        bool(get_groq_api_key()), get_text_model(), get_vision_model(), get_llm_timeout(),
        get_max_image_bytes(), get_max_batch_dishes(), ",".join(get_allowed_origins()),
    )
