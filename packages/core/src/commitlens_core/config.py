import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from commitlens_core.exceptions import ConfigurationError

DEFAULT_CONFIG: dict = {
    "summarizer": "filelist",  # filelist | openai | anthropic
    "openai_model": "gpt-4o-mini",
    "anthropic_model": "claude-sonnet-4-20250514",
    "max_query_length": 20000,
    "temperature": 0.9,
    "max_tokens": 1024,
}

_API_KEY_FIELDS = {
    "openai": "openai_api_key",
    "anthropic": "anthropic_api_key",
}


@dataclass(frozen=True)
class GenerationConfig:
    """Settings injected into a generative summarizer at start-up."""

    api_key: str
    model: str
    max_query_length: int = 20000
    temperature: float = 0.9
    max_tokens: int = 1024


def load_config(config_path: str = ".commitlens.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .commitlens.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # Resolve credentials from environment variables
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")

    return config


def generation_config(config: dict, provider: str) -> GenerationConfig:
    """Build the GenerationConfig for ``provider`` from a loaded config dict.

    Raises ConfigurationError when the provider is unknown or its API key is unset.
    """
    key_field = _API_KEY_FIELDS.get(provider)
    if key_field is None:
        raise ConfigurationError(f"Unknown generation provider: {provider!r}. Choose 'openai' or 'anthropic'.")
    api_key = config.get(key_field)
    if not api_key:
        raise ConfigurationError(f"{key_field.upper()} environment variable is not set.")
    return GenerationConfig(
        api_key=api_key,
        model=config.get(f"{provider}_model") or DEFAULT_CONFIG[f"{provider}_model"],
        max_query_length=int(config.get("max_query_length", DEFAULT_CONFIG["max_query_length"])),
        temperature=float(config.get("temperature", DEFAULT_CONFIG["temperature"])),
        max_tokens=int(config.get("max_tokens", DEFAULT_CONFIG["max_tokens"])),
    )
