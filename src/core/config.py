"""Configuration models and loaders (YAML or environment) for letsmcp."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Trial order used when no preferred/default provider is given.
PROVIDER_ORDER: tuple[str, ...] = ("groq", "claude", "gemini")
DEFAULT_PROVIDER = PROVIDER_ORDER[0]


class _CamelModel(BaseModel):
    """Accepts both snake_case (YAML) and camelCase (REST) keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProviderConfig(_CamelModel):
    """Credentials and model override for one completion backend."""

    api_key: str = ""
    model: str | None = None

    @field_validator("api_key")
    @classmethod
    def api_key_stripped(cls, v: str) -> str:
        return v.strip()

    @field_validator("model")
    @classmethod
    def blank_model_is_default(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


class AIConfig(_CamelModel):
    """Provider blocks plus the default provider name.

    Also used as the partial update body for runtime reconfiguration: a
    block that is None leaves the existing registration untouched.
    """

    groq: ProviderConfig | None = None
    claude: ProviderConfig | None = None
    gemini: ProviderConfig | None = None
    default_provider: str | None = None
    attempt_timeout_s: float = Field(default=30.0, gt=0)

    @field_validator("default_provider")
    @classmethod
    def default_provider_normalized(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip().lower()

    def provider_blocks(self) -> dict[str, ProviderConfig]:
        """Return the present provider blocks keyed by provider name."""
        blocks: dict[str, ProviderConfig] = {}
        for name in PROVIDER_ORDER:
            block = getattr(self, name)
            if block is not None:
                blocks[name] = block
        return blocks


class ServerConfig(BaseModel):
    """HTTP façade and tool workspace settings."""

    host: str = "localhost"
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    files_dir: str = "mcp-files"

    @field_validator("files_dir")
    @classmethod
    def files_dir_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "files_dir must not be empty"
            raise ValueError(msg)
        return v.strip()


class Settings(BaseModel):
    """Top-level settings."""

    ai: AIConfig = Field(default_factory=AIConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Provider blocks are always present; an empty key simply leaves that
        provider unregistered.
        """
        env = os.environ if environ is None else environ

        def provider(prefix: str) -> dict[str, Any]:
            return {
                "api_key": env.get(f"{prefix}_API_KEY", ""),
                "model": env.get(f"{prefix}_MODEL"),
            }

        ai: dict[str, Any] = {
            "groq": provider("GROQ"),
            "claude": provider("CLAUDE"),
            "gemini": provider("GEMINI"),
            "default_provider": env.get("DEFAULT_AI_PROVIDER") or DEFAULT_PROVIDER,
        }
        if env.get("AI_TIMEOUT_SECONDS"):
            ai["attempt_timeout_s"] = env["AI_TIMEOUT_SECONDS"]

        server: dict[str, Any] = {
            "host": env.get("HOST", "localhost"),
            "port": env.get("PORT", "3000"),
            "files_dir": env.get("LETSMCP_FILES_DIR", "mcp-files"),
        }
        origins = [o.strip() for o in env.get("CORS_ORIGINS", "").split(",") if o.strip()]
        if origins:
            server["cors_origins"] = origins

        return cls.model_validate({"ai": ai, "server": server})
