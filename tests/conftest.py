import io

import pytest
from PIL import Image

from foodprint.services.groq_client import reset_client


@pytest.fixture(autouse=True)
def no_groq_key(monkeypatch):
    """Tests never talk to Groq: without a key every call falls back."""
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    reset_client()
    yield
    reset_client()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from foodprint.main import app
    return TestClient(app)


@pytest.fixture
def png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()
