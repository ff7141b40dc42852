"""Configuration management using Pydantic settings with optional file persistence."""

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Paths ---

APP_NAME = "ai-bug-fixer"

# Name under which hosts expose the completion credential
API_KEY_CONFIG_NAME = "aiBugFixer.openaiApiKey"

# Standard environment variable for the completion credential (industry convention)
STANDARD_API_KEY_ENV_VAR = "OPENAI_API_KEY"


def get_config_dir() -> Path:
    """Get the configuration directory (e.g. ~/.config/ai-bug-fixer)."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home() / ".config")).expanduser()
    else:
        base = Path("~/.config").expanduser()

    return base / APP_NAME


CONFIG_FILE = get_config_dir() / "config.json"


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load settings from the JSON config file if it exists."""
    path = path or CONFIG_FILE
    if not path.exists():
        return {}

    try:
        text = path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        data = json.loads(text)
    except (OSError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config_file(config_data: dict[str, Any], path: Path | None = None) -> Path:
    """Save settings to the JSON config file."""
    path = path or CONFIG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config_data, indent=2), encoding="utf-8")
    return path


DEFAULT_SYSTEM_PROMPT = "You are an expert software bug fixer. Explain errors and suggest fixes."


class LLMSettings(BaseSettings):
    """Chat-completion endpoint configuration."""

    model_config = SettingsConfigDict(env_prefix="BUGFIX_LLM_")

    api_key: Optional[SecretStr] = Field(default=None, description="API key override (highest priority)")
    model_name: str = Field(default="gpt-3.5-turbo")
    base_url: str = Field(default="https://api.openai.com/v1", description="Base URL of an OpenAI-compatible API")
    system_prompt: str = Field(default=DEFAULT_SYSTEM_PROMPT)
    max_input_chars: int = Field(default=8000, gt=0, description="Error text beyond this length is truncated in the prompt")
    missing_key_message: str = Field(default="No API key found.", min_length=1)
    error_message: str = Field(default="Error fetching AI response.", min_length=1)
    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")

    def resolve_api_key(self) -> Optional[str]:
        """Resolve API key with priority: BUGFIX_LLM_API_KEY > OPENAI_API_KEY.

        Returns:
            The resolved API key or None if not found.
        """
        if self.api_key and self.api_key.get_secret_value():
            return self.api_key.get_secret_value()
        return os.environ.get(STANDARD_API_KEY_ENV_VAR) or None


class SearchSettings(BaseSettings):
    """Q&A search endpoint configuration."""

    model_config = SettingsConfigDict(env_prefix="BUGFIX_SEARCH_")

    base_url: str = Field(default="https://api.stackexchange.com/2.3")
    site: str = Field(default="stackoverflow", description="Stack Exchange site id")
    max_results: int = Field(default=3, ge=0, le=3)
    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")


TransportType = Literal["stdio", "streamable-http", "sse"]


class ServerSettings(BaseSettings):
    """Server configuration."""

    model_config = SettingsConfigDict(env_prefix="BUGFIX_SERVER_")

    logging_level: str = Field(default="INFO")
    transport: TransportType = Field(default="stdio", description="MCP transport: stdio, streamable-http, or sse")
    host: str = Field(default="127.0.0.1", description="Host for HTTP transports")
    port: int = Field(default=8384, description="Port for HTTP transports")
    read_clipboard: bool = Field(default=True, description="Fall back to the server machine's clipboard (stdio transport only)")

    def clipboard_allowed(self) -> bool:
        """Whether tool calls may read this machine's clipboard.

        Never over HTTP transports, where the caller is not the local user.
        """
        return self.read_clipboard and self.transport == "stdio"


class AppSettings(BaseSettings):
    """Root application settings.

    Priority: Environment Variables > Config File > Defaults
    """

    model_config = SettingsConfigDict(env_prefix="BUGFIX_", extra="ignore")

    llm: LLMSettings = Field(default_factory=LLMSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    def save(self, path: Path | None = None) -> Path:
        """Save current configuration to file (excluding secrets)."""
        data = self.model_dump(mode="json", exclude_none=True)
        data.get("llm", {}).pop("api_key", None)
        return save_config_file(data, path)

    def get_config_value(self, name: str) -> Optional[str]:
        """Look up a host-facing configuration value by name."""
        if name == API_KEY_CONFIG_NAME:
            return self.llm.resolve_api_key()
        return None


def _load_settings() -> AppSettings:
    """Load settings with file config as base, env vars overlay."""
    file_data = load_config_file()
    return _merge_env(file_data)


def _merge_env(file_data: dict[str, Any]) -> AppSettings:
    # Nested models read their own env prefixes; file values only fill what env leaves unset
    sections = {"llm": LLMSettings, "search": SearchSettings, "server": ServerSettings}
    kwargs: dict[str, Any] = {}
    for name, model in sections.items():
        section = file_data.get(name)
        if not isinstance(section, dict):
            continue
        env_set = {field for field in model.model_fields if f"{model.model_config['env_prefix']}{field}".upper() in os.environ}
        kwargs[name] = model(**{k: v for k, v in section.items() if k in model.model_fields and k not in env_set})
    return AppSettings(**kwargs)


settings = _load_settings()
