"""Configuration settings and data models."""

import json
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = "versus_config.json"


class GeminiConfig(BaseModel):
    """Gemini-specific configuration (OpenAI-compatible endpoint)."""

    api_key: str | None = Field(
        default=None, description="Gemini API key (can also be set via GEMINI_API_KEY env var)"
    )
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/openai/",
        description="Gemini OpenAI-compatible API base URL",
    )
    model: str = Field(default="gemini-2.5-flash-lite", description="Model used for every generation call")
    timeout: float = Field(default=60.0, description="API request timeout in seconds")


class OpenRouterConfig(BaseModel):
    """OpenRouter-specific configuration."""

    api_key: str | None = Field(
        default=None, description="OpenRouter API key (can also be set via OPENROUTER_API_KEY env var)"
    )
    base_url: str = Field(
        default="https://openrouter.ai/api/v1", description="OpenRouter API base URL"
    )
    model: str = Field(default="google/gemini-2.5-flash-lite", description="Model used for every generation call")
    site_url: str | None = Field(
        default=None, description="Your site URL for OpenRouter referrer tracking"
    )
    app_name: str | None = Field(
        default="Versus Product Debate", description="App name for OpenRouter tracking"
    )
    timeout: float = Field(default=60.0, description="API request timeout in seconds")


class RetryConfig(BaseModel):
    """Retry behaviour for rate-limited generation calls."""

    max_retries: int = Field(
        default=3, ge=0, description="Additional attempts after a rate-limited call"
    )
    backoff_seconds: float = Field(
        default=10.5, ge=0.0, description="Fixed wait between rate-limited attempts"
    )


class DebateConfig(BaseModel):
    """Debate round configuration."""

    opening_sentence_limit: int = Field(default=3, ge=1, description="Sentence ceiling for opening statements")
    pros_cons_sentence_limit: int = Field(default=4, ge=1, description="Sentence ceiling for pros/cons statements")
    criticism_sentence_limit: int = Field(default=3, ge=1, description="Sentence ceiling for criticism statements")
    rebuttal_sentence_limit: int = Field(default=3, ge=1, description="Sentence ceiling for rebuttals")
    verdict_word_limit: int = Field(default=150, ge=1, description="Word ceiling for the moderator verdict")
    min_entities: int = Field(default=2, ge=1, description="Minimum number of products in a debate")
    session_ttl_seconds: float | None = Field(
        default=None, description="Evict idle debates after this many seconds (None keeps them forever)"
    )


class AnalysisConfig(BaseModel):
    """Product analysis configuration."""

    require_details: bool = Field(
        default=False,
        description="Fail the whole analysis batch when any product's details cannot be parsed",
    )


class SystemConfig(BaseModel):
    """System-wide configuration."""

    provider: Literal["gemini", "openrouter"] = Field(
        default="gemini", description="Text-generation backend"
    )
    gemini: GeminiConfig = Field(
        default_factory=GeminiConfig, description="Gemini-specific settings"
    )
    openrouter: OpenRouterConfig = Field(
        default_factory=OpenRouterConfig, description="OpenRouter-specific settings"
    )
    retry: RetryConfig = Field(
        default_factory=RetryConfig, description="Rate-limit retry settings"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v


class ModelConfig(BaseModel):
    """Configuration for the model behind generation calls."""

    name: str = Field(..., description="Model name (e.g., 'gemini-2.5-flash-lite')")
    provider: str = Field(default="gemini", description="Model provider (gemini, openrouter)")
    max_tokens: int | None = Field(default=None, description="Maximum tokens per response")
    temperature: float = Field(default=0.7, description="Model temperature")

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v):
        valid_providers = {"gemini", "openrouter"}
        if v not in valid_providers:
            raise ValueError(f"Provider must be one of: {valid_providers}")
        return v


class AppConfig(BaseModel):
    """Complete application configuration."""

    debate: DebateConfig = Field(default_factory=DebateConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    system: SystemConfig = Field(default_factory=SystemConfig)

    def model_config_for_generation(self) -> ModelConfig:
        """Build the model configuration for the selected provider."""
        provider = self.system.provider
        if provider == "openrouter":
            return ModelConfig(name=self.system.openrouter.model, provider=provider)
        return ModelConfig(name=self.system.gemini.model, provider=provider)

    @classmethod
    def load_from_file(cls, config_path: Path) -> "AppConfig":
        """Load configuration from a JSON or YAML file."""
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {config_path}")

        unknown_sections = set(data) - {"debate", "analysis", "system"}
        if unknown_sections:
            raise ValueError(f"Unknown config sections: {sorted(unknown_sections)}")

        return cls(**data)

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(
                self.model_dump(exclude_unset=True),
                f,
                default_flow_style=False,
                indent=2,
            )


def get_default_config() -> AppConfig:
    """Load configuration from VERSUS_CONFIG or versus_config.json, else the template."""
    config_path = Path(os.environ.get("VERSUS_CONFIG", DEFAULT_CONFIG_PATH))
    if config_path.exists():
        return AppConfig.load_from_file(config_path)
    return get_template_config()


def get_template_config() -> AppConfig:
    """Get template configuration for config file generation."""
    return AppConfig(
        debate=DebateConfig(
            opening_sentence_limit=3,
            pros_cons_sentence_limit=4,
            criticism_sentence_limit=3,
            rebuttal_sentence_limit=3,
            verdict_word_limit=150,
        ),
        analysis=AnalysisConfig(require_details=False),
        system=SystemConfig(
            provider="gemini",
            gemini=GeminiConfig(
                api_key=None,  # Set your Gemini API key here or use GEMINI_API_KEY env var
                model="gemini-2.5-flash-lite",
            ),
            retry=RetryConfig(max_retries=3, backoff_seconds=10.5),
            log_level="INFO",
        ),
    )
