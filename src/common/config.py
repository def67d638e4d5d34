"""Configuration for the news audio pipeline.

Settings come from ``configs/<name>.yaml`` and are overlaid with a few
environment variables. Provider credentials are read from the environment
(``.env`` is loaded with python-dotenv) and never stored in YAML.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, TypeVar

import yaml
from dotenv import load_dotenv

T = TypeVar('T')

CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"
CONFIG_ENV_VAR = "NEWS_AUDIO_CONFIG"
DEFAULT_CONFIG_NAME = "prod"

SYNTHESIS_STRATEGIES = ("per_article", "combined")


@dataclass
class NewsConfig:
    country: str = "us"
    page_size: int = 20
    newsapi_url: str = "https://newsapi.org/v2/top-headlines"
    guardian_url: str = "https://content.guardianapis.com/search"


@dataclass
class SummarizeConfig:
    instruction: str = "Summarize this article in 2 sentences:"
    openai_model: str = "gpt-4-turbo"
    temperature: float = 0.7
    gemini_model: str = "gemini-2.0-flash"


@dataclass
class SpeechConfig:
    strategy: str = "per_article"
    openai_model: str = "tts-1"
    openai_voice: str = "alloy"
    language_code: str = "en-US"
    ssml_gender: str = "NEUTRAL"
    audio_encoding: str = "MP3"


@dataclass
class ProvidersConfig:
    timeout_seconds: float | None = 30.0


@dataclass
class StorageConfig:
    state_path: str = "data/news.json"
    narration_path: str = "data/summaries.json"
    audio_dir: str = "audio"
    audio_url_prefix: str = "/audio"


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class Credentials:
    news_api_key: str | None = None
    guardian_api_key: str | None = None
    openai_api_key: str | None = None
    gemini_api_key: str | None = None

    @classmethod
    def from_env(cls) -> "Credentials":
        return cls(
            news_api_key=os.environ.get("NEWS_API_KEY"),
            guardian_api_key=os.environ.get("GUARDIAN_API_KEY"),
            openai_api_key=os.environ.get("OPENAI_API_KEY"),
            gemini_api_key=os.environ.get("GEMINI_API_KEY"),
        )


@dataclass
class Settings:
    news: NewsConfig = field(default_factory=NewsConfig)
    summarize: SummarizeConfig = field(default_factory=SummarizeConfig)
    speech: SpeechConfig = field(default_factory=SpeechConfig)
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    credentials: Credentials = field(default_factory=Credentials)


def find_config_path(config_name: str | None, config_dir: Path) -> Path:
    """Resolve a config name to a YAML file, defaulting to NEWS_AUDIO_CONFIG or prod."""
    name = config_name or os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_NAME)
    config_path = config_dir / f"{name}.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return config_path


def load_yaml(path: Path) -> dict:
    """Read a YAML config file; an empty file reads as no overrides."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _section(raw: dict, name: str, cls: type[T]) -> T:
    values = raw.get(name) or {}
    known = cls.__dataclass_fields__
    unknown = set(values) - set(known)
    if unknown:
        raise ValueError(f"Unknown keys in '{name}' config: {', '.join(sorted(unknown))}")
    return cls(**values)


def parse_settings(raw: dict) -> Settings:
    """Build Settings from a parsed YAML dict, applying environment overrides."""
    settings = Settings(
        news=_section(raw, "news", NewsConfig),
        summarize=_section(raw, "summarize", SummarizeConfig),
        speech=_section(raw, "speech", SpeechConfig),
        providers=_section(raw, "providers", ProvidersConfig),
        storage=_section(raw, "storage", StorageConfig),
        server=_section(raw, "server", ServerConfig),
        credentials=Credentials.from_env(),
    )

    if os.environ.get("PORT"):
        settings.server.port = int(os.environ["PORT"])
    if os.environ.get("NEWS_COUNTRY"):
        settings.news.country = os.environ["NEWS_COUNTRY"]
    if os.environ.get("TTS_LANGUAGE_CODE"):
        settings.speech.language_code = os.environ["TTS_LANGUAGE_CODE"]

    if settings.speech.strategy not in SYNTHESIS_STRATEGIES:
        raise ValueError(
            f"Unknown speech strategy '{settings.speech.strategy}'. "
            f"Valid strategies: {', '.join(SYNTHESIS_STRATEGIES)}"
        )
    return settings


def load_settings(config_name: str | None = None, config_dir: Path = CONFIG_DIR) -> Settings:
    """Load settings from ``<config_dir>/<config_name>.yaml``.

    Args:
        config_name: Name of config (without .yaml). Falls back to the
            NEWS_AUDIO_CONFIG env var, then "prod".
        config_dir: Directory containing config files
    """
    load_dotenv()
    path = find_config_path(config_name, config_dir)
    return parse_settings(load_yaml(path))


class ConfigSingleton:
    """Process-wide settings, loaded on first use unless set explicitly."""

    def __init__(self, loader: Callable[[], Settings] | None = None):
        self._settings: Settings | None = None
        self._loader = loader

    def get(self) -> Settings:
        if self._settings is None:
            if self._loader is None:
                raise RuntimeError("No settings loaded and no loader set")
            self._settings = self._loader()
        return self._settings

    def set(self, settings: Settings) -> None:
        self._settings = settings


_manager = ConfigSingleton(load_settings)
get_settings = _manager.get
set_settings = _manager.set
