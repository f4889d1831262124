# foodprint/services/groq_client.py
import asyncio
import json
import logging
import re
from typing import Dict, List, Optional

from groq import Groq, GroqError

from ..config import get_groq_api_key, get_llm_timeout
from ..errors import InferenceContractViolation, InferenceError, InferenceUnavailable

logger = logging.getLogger(__name__)

_client: Optional[Groq] = None


def get_client() -> Groq:
    """
    Build the Groq client on first use. A missing key is an inference
    failure like any other, so the service still starts without one.
    """
    global _client
    if _client is None:
        api_key = get_groq_api_key()
        if not api_key:
            raise InferenceUnavailable("GROQ_API_KEY not provided in environment")
        _client = Groq(api_key=api_key, timeout=get_llm_timeout())
    return _client


def reset_client() -> None:
    global _client
    _client = None


def chat_completion_sync(
    messages: List[Dict],
    model: str,
    max_tokens: int = 1000,
    temperature: float = 0.3,
    json_mode: bool = True,
) -> str:
    """
    Blocking chat-completions call. Run it with asyncio.to_thread from
    async code so the event loop stays free.
    """
    kwargs = {}
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}
    client = get_client()
    try:
        resp = client.chat.completions.create(
            messages=messages,
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            **kwargs,
        )
    except GroqError as e:
        raise InferenceUnavailable(f"{type(e).__name__}: {e}") from e
    except Exception as e:
        # anything else the SDK or transport lets through
        raise InferenceUnavailable(f"{type(e).__name__}: {e}") from e

    choices = getattr(resp, "choices", None) or []
    message = getattr(choices[0], "message", None) if choices else None
    content = getattr(message, "content", None) if message is not None else None
    if not content:
        raise InferenceContractViolation("No response content from model")
    return content


async def chat_completion(messages: List[Dict], model: str, **kwargs) -> str:
    return await asyncio.to_thread(chat_completion_sync, messages, model, **kwargs)


def extract_json_object(text: str) -> Dict:
    """
    Parse model output as a JSON object. Be lenient: if the model wrapped
    the object in prose, use the first {...} block.
    """
    if not isinstance(text, str):
        raise InferenceContractViolation("Model output is not text")
    try:
        parsed = json.loads(text)
        if isinstance(parsed, dict):
            return parsed
    except (ValueError, RecursionError):
        pass

    m = re.search(r"(\{.*\})", text, re.S)
    if m:
        try:
            parsed = json.loads(m.group(1))
            if isinstance(parsed, dict):
                return parsed
        except (ValueError, RecursionError):
            pass
    raise InferenceContractViolation("Model output is not a JSON object")


async def ping(model: str, messages: Optional[List[Dict]] = None) -> bool:
    """True when the model answers anything at all."""
    messages = messages or [{"role": "user", "content": "Hello"}]
    try:
        await chat_completion(messages, model, max_tokens=5, temperature=0.0, json_mode=False)
        return True
    except InferenceError as e:
        logger.warning("HEALTH ping failed model=%s error=%s", model, e)
        return False
