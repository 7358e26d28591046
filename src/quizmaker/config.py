"""
config.py — Central settings for QuizMaker
==========================================
All configuration is loaded from environment variables / .env file.
Copy .env.example → .env and fill in your values.

Live mode activates automatically when either the Azure OpenAI pair
(AZURE_OPENAI_ENDPOINT + AZURE_OPENAI_API_KEY) or GEMINI_API_KEY contains a
real (non-placeholder) value.  Otherwise the rule-based mock generator runs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env into os.environ (no-op if already set, safe to call multiple times)
load_dotenv(override=False)

# Workspace root (…/src/quizmaker/config.py → three levels up)
_ROOT_DIR = Path(__file__).resolve().parent.parent.parent


# ─── Helpers ────────────────────────────────────────────────────────────────

def _is_placeholder(value: str) -> bool:
    """Return True if the value looks like an unfilled template placeholder."""
    return not value or "<" in value or value.startswith("your-") or value == "PLACEHOLDER"


# ─── Azure OpenAI ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AzureOpenAIConfig:
    endpoint:    str
    api_key:     str
    deployment:  str
    api_version: str

    @property
    def is_configured(self) -> bool:
        """True when both endpoint and key are real (non-placeholder) values."""
        return (
            bool(self.endpoint)
            and bool(self.api_key)
            and not _is_placeholder(self.endpoint)
            and not _is_placeholder(self.api_key)
        )


# ─── Google Gemini ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class GeminiConfig:
    api_key: str
    model:   str

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and not _is_placeholder(self.api_key)


# ─── Persistence ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class StoreConfig:
    db_path: Path


# ─── Identity ────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AuthConfig:
    allowed_domain: str   # e.g. "tokium.jp" (no leading "@")
    mode:           str   # "dev" | "oidc"


# ─── App-level settings ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class AppConfig:
    force_mock_mode: bool
    base_url:        str
    log_level:       str
    temperature:     float


# ─── Master settings object ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    openai: AzureOpenAIConfig
    gemini: GeminiConfig
    store:  StoreConfig
    auth:   AuthConfig
    app:    AppConfig

    @property
    def live_mode(self) -> bool:
        """True when any AI provider is configured and FORCE_MOCK_MODE is false."""
        return (
            (self.openai.is_configured or self.gemini.is_configured)
            and not self.app.force_mock_mode
        )

    @property
    def provider(self) -> str:
        """Name of the highest available generation tier."""
        if self.app.force_mock_mode:
            return "mock"
        if self.openai.is_configured:
            return "azure_openai"
        if self.gemini.is_configured:
            return "gemini"
        return "mock"

    def status_summary(self) -> dict[str, str]:
        """Return a dict of service → status badge for the UI."""
        def badge(ok: bool) -> str:
            return "🟢 Live" if ok else "⚪ Not configured"

        return {
            "Azure OpenAI":  badge(self.openai.is_configured),
            "Google Gemini": badge(self.gemini.is_configured),
            "Mock generator": "🟢 Active" if self.provider == "mock" else "⚪ Standby",
        }


def get_settings() -> Settings:
    """Load all configuration from environment variables."""
    _str   = lambda k, d="": os.getenv(k, d).strip()
    _bool  = lambda k, d=False: os.getenv(k, str(d)).lower() in ("1", "true", "yes")
    _float = lambda k, d=0.0: float(os.getenv(k, str(d)) or d)

    db_path = _str("QUIZMAKER_DB_PATH")

    return Settings(
        openai=AzureOpenAIConfig(
            endpoint    = _str("AZURE_OPENAI_ENDPOINT").rstrip("/"),
            api_key     = _str("AZURE_OPENAI_API_KEY"),
            deployment  = _str("AZURE_OPENAI_DEPLOYMENT", "gpt-4o"),
            api_version = _str("AZURE_OPENAI_API_VERSION", "2024-12-01-preview"),
        ),
        gemini=GeminiConfig(
            api_key = _str("GEMINI_API_KEY"),
            model   = _str("GEMINI_MODEL", "gemini-2.5-flash"),
        ),
        store=StoreConfig(
            db_path = Path(db_path) if db_path else _ROOT_DIR / "quizmaker_data.db",
        ),
        auth=AuthConfig(
            allowed_domain = _str("ALLOWED_EMAIL_DOMAIN", "tokium.jp").lstrip("@").lower(),
            mode           = _str("AUTH_MODE", "dev").lower(),
        ),
        app=AppConfig(
            force_mock_mode = _bool("FORCE_MOCK_MODE", False),
            base_url        = _str("APP_BASE_URL", "http://localhost:8501").rstrip("/"),
            log_level       = _str("LOG_LEVEL", "INFO").upper(),
            temperature     = _float("GENERATION_TEMPERATURE", 0.5),
        ),
    )
