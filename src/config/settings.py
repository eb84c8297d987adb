from __future__ import annotations

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env once at module import so every BaseSettings subclass sees the env vars
load_dotenv()


def split_csv(raw: str) -> frozenset[str]:
    """Parse a comma-separated env value into a set of non-empty, stripped items."""
    return frozenset(item.strip() for item in raw.split(",") if item.strip())


class GatewaySettings(BaseSettings):
    """HTTP gateway settings. Env vars prefixed with GATEWAY_."""

    model_config = SettingsConfigDict(env_prefix="GATEWAY_")

    host: str = "0.0.0.0"
    port: int = Field(3000, gt=0, le=65535)


class SecuritySettings(BaseSettings):
    """Security gate policy. Env vars prefixed with SECURITY_.

    auth_mode=allow_all keeps the placeholder policy: every request is
    authenticated and every tool is authorized unless listed in denied_tools.
    """

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    auth_mode: str = "allow_all"
    api_tokens: str = ""  # comma-separated; empty = any well-formed bearer token
    allowed_tools: str = ""  # comma-separated; empty = all tools
    denied_tools: str = ""  # comma-separated; always wins over allowed_tools
    token_expiration_s: int = Field(3600, gt=0)  # reported as expiresIn by the auth tool

    @field_validator("auth_mode")
    @classmethod
    def _validate_auth_mode(cls, v: str) -> str:
        allowed = {"allow_all", "bearer"}
        v = v.strip().lower()
        if v not in allowed:
            msg = f"SECURITY_AUTH_MODE must be one of {sorted(allowed)} (got '{v}')"
            raise ValueError(msg)
        return v


class DispatchSettings(BaseSettings):
    """Tool execution settings. Env vars prefixed with DISPATCH_."""

    model_config = SettingsConfigDict(env_prefix="DISPATCH_")

    execution_timeout_s: float = Field(30.0, gt=0)
    validate_input: bool = True


class ContextSettings(BaseSettings):
    """Session context store limits. Env vars prefixed with CONTEXT_."""

    model_config = SettingsConfigDict(env_prefix="CONTEXT_")

    max_sessions: int = Field(10_000, gt=0)
    idle_ttl_s: float = Field(0.0, ge=0)  # 0 = never expire on idle


class ServiceSettings(BaseSettings):
    """Downstream ARC microservice endpoints. Env vars prefixed with SERVICES_."""

    model_config = SettingsConfigDict(env_prefix="SERVICES_")

    auth_service_url: str = "http://localhost:3001"
    notification_service_url: str = "http://localhost:3002"


class DocumentationSettings(BaseSettings):
    """Documentation search settings. Env vars prefixed with DOCS_."""

    model_config = SettingsConfigDict(env_prefix="DOCS_")

    base_url: str = "https://sourcefuse.github.io/arc-docs/"
    cache_enabled: bool = False
    cache_expiration_s: int = Field(3600, gt=0)


class LoggingSettings(BaseSettings):
    """Log output settings. Env vars prefixed with LOG_."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    json_output: bool = False

    @field_validator("level")
    @classmethod
    def _validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        v = v.strip().upper()
        if v not in allowed:
            msg = f"LOG_LEVEL must be one of {sorted(allowed)} (got '{v}')"
            raise ValueError(msg)
        return v


class Settings(BaseSettings):
    """Root settings composing all sub-configurations."""

    model_config = SettingsConfigDict(extra="ignore")

    gateway: GatewaySettings = Field(default_factory=GatewaySettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    dispatch: DispatchSettings = Field(default_factory=DispatchSettings)
    context: ContextSettings = Field(default_factory=ContextSettings)
    services: ServiceSettings = Field(default_factory=ServiceSettings)
    docs: DocumentationSettings = Field(default_factory=DocumentationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def get_settings() -> Settings:
    """Load and validate settings. Raises ValidationError on invalid values."""
    return Settings()
