"""Configuration management for StruggleMeal recipe generation.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults

Provider credentials are optional: a missing key disables the providers that
need it instead of failing startup, so the generation chain can still fall back.
"""

import os
from typing import Optional

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini API Key: used by both the primary and secondary generative models.
        # Empty string means both Gemini providers are skipped.
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        self.GEMINI_API_BASE: str = os.getenv(
            "GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta/models"
        )
        # Primary model: fast, cheap, tried first
        self.GEMINI_PRIMARY_MODEL: str = os.getenv("GEMINI_PRIMARY_MODEL", "gemini-2.0-flash")
        # Secondary model: same prompt and wire format, tried when the primary fails
        self.GEMINI_FALLBACK_MODEL: str = os.getenv("GEMINI_FALLBACK_MODEL", "gemini-1.0-pro")
        # Tertiary general-purpose model (Hugging Face Inference API)
        self.HUGGING_FACE_API_URL: str = os.getenv(
            "HUGGING_FACE_API_URL", "https://api-inference.huggingface.co/models/gpt2"
        )
        # Optional: the public inference endpoint accepts anonymous calls
        self.HUGGING_FACE_API_KEY: Optional[str] = os.getenv("HUGGING_FACE_API_KEY") or None
        self.HF_MAX_NEW_TOKENS: int = int(os.getenv("HF_MAX_NEW_TOKENS", "1000"))
        self.HF_TEMPERATURE: float = float(os.getenv("HF_TEMPERATURE", "0.7"))
        self.HF_TOP_P: float = float(os.getenv("HF_TOP_P", "0.9"))
        # YouTube Data API key for the video lookup. Empty disables lookups.
        self.YOUTUBE_API_KEY: str = os.getenv("YOUTUBE_API_KEY", "")
        # Upper bound for a single provider call, in seconds. Default: 30
        self.PROVIDER_TIMEOUT_SECONDS: float = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "30"))
        # Upper bound for a video search call, in seconds. Default: 10
        self.VIDEO_TIMEOUT_SECONDS: float = float(os.getenv("VIDEO_TIMEOUT_SECONDS", "10"))
        # Number of generations a free account gets before the upgrade prompt. Default: 3
        self.FREE_RECIPE_LIMIT: int = int(os.getenv("FREE_RECIPE_LIMIT", "3"))

    @property
    def gemini_primary_url(self) -> str:
        return f"{self.GEMINI_API_BASE.rstrip('/')}/{self.GEMINI_PRIMARY_MODEL}:generateContent"

    @property
    def gemini_fallback_url(self) -> str:
        return f"{self.GEMINI_API_BASE.rstrip('/')}/{self.GEMINI_FALLBACK_MODEL}:generateContent"

    def validate(self) -> None:
        """Validate configuration values.

        Missing API keys are not errors here; they only disable providers.

        Raises:
            ValueError: If a numeric setting is out of range.
        """
        if self.PROVIDER_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"PROVIDER_TIMEOUT_SECONDS must be positive, got: {self.PROVIDER_TIMEOUT_SECONDS}"
            )
        if self.VIDEO_TIMEOUT_SECONDS <= 0:
            raise ValueError(f"VIDEO_TIMEOUT_SECONDS must be positive, got: {self.VIDEO_TIMEOUT_SECONDS}")
        if not (0.0 <= self.HF_TEMPERATURE <= 2.0):
            raise ValueError(f"HF_TEMPERATURE must be between 0.0 and 2.0, got: {self.HF_TEMPERATURE}")
        if not (0.0 < self.HF_TOP_P <= 1.0):
            raise ValueError(f"HF_TOP_P must be in (0.0, 1.0], got: {self.HF_TOP_P}")
        if self.HF_MAX_NEW_TOKENS < 1:
            raise ValueError(f"HF_MAX_NEW_TOKENS must be at least 1, got: {self.HF_MAX_NEW_TOKENS}")
        if self.FREE_RECIPE_LIMIT < 0:
            raise ValueError(f"FREE_RECIPE_LIMIT must be non-negative, got: {self.FREE_RECIPE_LIMIT}")


# Create module-level config instance and validate immediately
config = Config()
config.validate()
