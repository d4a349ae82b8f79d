"""Application configuration using Pydantic Settings with YAML support.

Configuration is organized by domain in YAML files, overridden per
environment, and finally by environment variables. Secrets (API keys, the
app token) only ever come from the environment or ``.env``.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Annotated

from pydantic import BaseModel, BeforeValidator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


class LLMProvider(StrEnum):
    """Which collaborator the generation service talks to.

    - OPENAI: Call the chat-completions API directly with the server's key
    - PROXY: Call a token-gated ``/generate`` proxy endpoint
    """

    OPENAI = "openai"
    PROXY = "proxy"


def parse_list(v: str | list[str]) -> list[str]:
    """Parse comma-separated string or list into list of strings."""
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Pantry Chef Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


class MetricsSettings(BaseModel):
    """Metrics configuration settings."""

    enabled: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration settings."""

    metrics: MetricsSettings = MetricsSettings()


class OpenAISettings(BaseModel):
    """Chat-completions upstream configuration."""

    url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    temperature: float = 0.3
    max_tokens: int | None = 1500
    timeout: float = 60.0
    max_retries: int = 2
    requests_per_minute: float = 60.0
    tool_mode: bool = True  # Force a make_recipe tool call for JSON arguments


class ProxySettings(BaseModel):
    """Token-gated proxy collaborator configuration."""

    url: str = "http://127.0.0.1:8000"
    path: str = "/api/v1/generate"
    timeout: float = 60.0


class LLMSettings(BaseModel):
    """LLM configuration settings."""

    provider: str = "openai"
    openai: OpenAISettings = OpenAISettings()
    proxy: ProxySettings = ProxySettings()


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Priority (highest to lowest):
    1. Values passed to Settings()
    2. Environment variables
    3. .env file
    4. Environment-specific YAML files (config/environments/{APP_ENV}/)
    5. Base YAML files (config/base/)
    6. Default values in code

    Nested values use the ``__`` delimiter, e.g. ``LLM__OPENAI__MODEL=gpt-4o``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    llm: LLMSettings = LLMSettings()

    # =========================================================================
    # Secrets and gate configuration (from .env / environment only)
    # =========================================================================
    OPENAI_API_KEY: str = ""
    APP_TOKEN: str = ""

    # Browser origins allowed to call the API (comma-separated). Empty allows all.
    ALLOW_ORIGINS: Annotated[list[str], NoDecode, BeforeValidator(parse_list)] = []

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source below environment variables and .env."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    # =========================================================================
    # Computed Fields
    # =========================================================================

    @property
    def llm_provider_enum(self) -> LLMProvider:
        """Get the LLM provider as enum with validation."""
        try:
            return LLMProvider(self.llm.provider.lower())
        except ValueError:
            msg = (
                f"Invalid LLM provider: {self.llm.provider}. "
                f"Must be one of: {', '.join(p.value for p in LLMProvider)}"
            )
            raise ValueError(msg) from None

    @property
    def proxy_generate_url(self) -> str:
        """Full URL of the proxy generate endpoint."""
        return f"{self.llm.proxy.url.rstrip('/')}{self.llm.proxy.path}"

    def is_origin_allowed(self, origin: str) -> bool:
        """Check an Origin header value against the allow-list."""
        if not self.ALLOW_ORIGINS:
            return True
        return origin in self.ALLOW_ORIGINS

    # =========================================================================
    # Environment Helpers
    # =========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_non_production(self) -> bool:
        """Check if API docs and detailed errors should be enabled."""
        return self.APP_ENV in ("local", "test", "development")

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
