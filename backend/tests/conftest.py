"""
Shared pytest fixtures and configuration for all tests
"""
import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

from google.genai import types

# Add backend to Python path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))


def make_response(*parts):
    """Build a model reply whose first candidate carries the given parts"""
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=list(parts)))]
    )


def text_part(text):
    return types.Part(text=text)


def image_part(data, mime_type="image/png"):
    return types.Part(inline_data=types.Blob(data=data, mime_type=mime_type))


@pytest.fixture
def canvas_data_url():
    """Blank 800x600 canvas serialized as a PNG data URL"""
    from editor.canvas import DoodleCanvas
    return DoodleCanvas().to_data_url()


@pytest.fixture
def mock_genai_client():
    """Stand-in for google.genai.Client with async generate and chat calls"""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=make_response())

    chat = MagicMock()
    chat.send_message = AsyncMock(return_value=make_response())
    client.aio.chats.create.return_value = chat
    return client


@pytest.fixture
def gemini_service(mock_genai_client):
    from services.gemini_service import GeminiService
    return GeminiService(api_key="test-key", client_factory=lambda key: mock_genai_client)


@pytest.fixture
def test_settings(tmp_path):
    from config.settings import Settings
    return Settings(GEMINI_API_KEY="test-key", SAVE_DIR=str(tmp_path / "generated"))


@pytest.fixture
def make_app(gemini_service):
    """Build an app from the given settings, sharing the mocked model client"""
    from main import create_app

    def factory(settings):
        return create_app(settings=settings, gemini_service=gemini_service)
    return factory


@pytest.fixture
def app(make_app, test_settings):
    return make_app(test_settings)


@pytest.fixture
def client(app):
    """Provide FastAPI test client"""
    from fastapi.testclient import TestClient
    return TestClient(app)
