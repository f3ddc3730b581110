"""Client configuration: pydantic model, YAML loading with env-var interpolation, .env support."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

DEFAULT_API_URL = "https://api.groupme.com/v3"
DEFAULT_IMAGE_URL = "https://image.groupme.com/pictures"

TOKEN_ENV_VAR = "GM_TOKEN"


class ClientConfig(BaseModel):
    """Settings threaded into a GroupMeClient.

    ``access_token`` is read on every request, so it may be replaced at runtime.
    """

    access_token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    image_url: str = DEFAULT_IMAGE_URL
    timeout: float = 30.0
    log_level: str = "INFO"


_ENV_VAR_PATTERN = re.compile(r"\$\{(\w+)\}")


def _interpolate_env_vars(text: str) -> str:
    """Replace ${VAR_NAME} patterns with environment variable values."""

    def _replace(match: re.Match) -> str:
        value = os.environ.get(match.group(1))
        if value is None:
            return match.group(0)
        return value

    return _ENV_VAR_PATTERN.sub(_replace, text)


def config_from_env(env_path: str | Path = ".env") -> ClientConfig:
    """Build a config from GM_* environment variables, loading a .env file first if present."""
    env_file = Path(env_path)
    if env_file.exists():
        load_dotenv(env_file)

    data: dict[str, str] = {}
    for field_name, var_name in (
        ("access_token", TOKEN_ENV_VAR),
        ("api_url", "GM_API_URL"),
        ("image_url", "GM_IMAGE_URL"),
        ("timeout", "GM_TIMEOUT"),
        ("log_level", "LOG_LEVEL"),
    ):
        value = os.environ.get(var_name)
        if value:
            data[field_name] = value

    return ClientConfig(**data)


def load_config(config_path: str | Path = "config.yaml", env_path: str | Path = ".env") -> ClientConfig:
    """Load and validate configuration from a YAML file with env-var interpolation."""
    env_file = Path(env_path)
    if env_file.exists():
        load_dotenv(env_file)

    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    raw_text = config_file.read_text(encoding="utf-8")
    data = yaml.safe_load(_interpolate_env_vars(raw_text)) or {}

    # An uninterpolated placeholder means the variable was never set
    token = data.get("access_token")
    if isinstance(token, str) and _ENV_VAR_PATTERN.fullmatch(token):
        data["access_token"] = None

    return ClientConfig(**data)
