"""Shared fixtures for unit tests.

FakeSession stands in for aiohttp.ClientSession: each URL maps to a scripted
response (status + body) or an exception to raise when the request is made.
Every call is recorded so tests can assert which providers were contacted.
"""

import json
from typing import Any, Dict, List, Optional

import aiohttp
import pytest

from strugglemeal.models.models import Preferences, Recipe
from strugglemeal.utils.config import Config


class FakeResponse:
    """Async context manager mimicking aiohttp.ClientResponse."""

    def __init__(self, status: int = 200, body: Any = None) -> None:
        self.status = status
        self._body = body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False

    async def text(self) -> str:
        if isinstance(self._body, str):
            return self._body
        return json.dumps(self._body)

    async def json(self, content_type: Optional[str] = "application/json") -> Any:
        if isinstance(self._body, str):
            return json.loads(self._body)
        return self._body

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientError(f"HTTP {self.status}")


class FakeSession:
    """Minimal aiohttp.ClientSession replacement keyed by URL."""

    def __init__(self, routes: Optional[Dict[str, Any]] = None) -> None:
        self.routes = routes or {}
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self.closed = True
        return False

    def _respond(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self.routes.get(url)
        if outcome is None:
            return FakeResponse(404, "not found")
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def post(self, url: str, **kwargs) -> FakeResponse:
        return self._respond("POST", url, **kwargs)

    def get(self, url: str, **kwargs) -> FakeResponse:
        return self._respond("GET", url, **kwargs)

    def called_urls(self) -> List[str]:
        return [call["url"] for call in self.calls]


def recipe_dict(name: str = "Rice Bowl", servings: int = 2, **overrides) -> Dict[str, Any]:
    """Wire-format recipe as a provider would emit it."""
    data = {
        "name": name,
        "ingredients": [
            {"name": "Rice", "amount": "1 cup", "cost": 0.5},
            {"name": "Beans", "amount": "1 can", "cost": 0.99},
        ],
        "instructions": ["Cook rice.", "Heat beans.", "Combine."],
        "prepTime": "15 minutes",
        "totalCost": 1.49,
        "costPerServing": 0.75,
        "servings": servings,
        "youtubeKeywords": "rice bowl student",
    }
    data.update(overrides)
    return data


def gemini_payload(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def preferences() -> Preferences:
    return Preferences(
        food_preferences="chicken, rice, beans",
        dietary_restrictions="",
        skill_level="beginner",
        budget=20,
        pantry_items=[],
    )


@pytest.fixture
def sample_recipe() -> Recipe:
    return Recipe.model_validate({"id": "r-1", **recipe_dict()})


@pytest.fixture
def test_config(monkeypatch) -> Config:
    """Config with every provider configured and deterministic endpoints."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-gemini-key")
    monkeypatch.setenv("GEMINI_API_BASE", "https://gemini.test/models")
    monkeypatch.setenv("GEMINI_PRIMARY_MODEL", "primary-model")
    monkeypatch.setenv("GEMINI_FALLBACK_MODEL", "fallback-model")
    monkeypatch.setenv("HUGGING_FACE_API_URL", "https://hf.test/models/gpt2")
    monkeypatch.delenv("HUGGING_FACE_API_KEY", raising=False)
    monkeypatch.setenv("YOUTUBE_API_KEY", "test-youtube-key")
    return Config()


PRIMARY_URL = "https://gemini.test/models/primary-model:generateContent"
FALLBACK_URL = "https://gemini.test/models/fallback-model:generateContent"
HF_URL = "https://hf.test/models/gpt2"
