from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import dotenv_values, load_dotenv

load_dotenv(override=True)

logger = logging.getLogger(__name__)

CONFIG_FILE_PATH = Path(__file__).parent / "config.yaml"
DEFAULT_CREDENTIALS_FILE = "API.env"


def load_config(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a given YAML file path.

    Raises:
        FileNotFoundError: If the configuration file is not found.
        ValueError: If there is an error parsing the YAML file.
    """
    path = Path(config_path)

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FileNotFoundError(f"Configuration file not found: {path}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file '{path}': {e}") from e

    return data or {}


@dataclass(frozen=True)
class EdamamSettings:
    base_url: str = "https://api.edamam.com/api/recipes/v2"
    api_type: str = "public"
    timeout_seconds: float = 10.0
    max_retries: int = 2
    backoff_seconds: float = 0.5
    max_concurrency: int = 8

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "EdamamSettings":
        edamam = cfg.get("edamam", {}) if isinstance(cfg, dict) else {}
        defaults = cls()
        return cls(
            base_url=str(edamam.get("base_url", defaults.base_url)).rstrip("/"),
            api_type=str(edamam.get("type", defaults.api_type)),
            timeout_seconds=float(edamam.get("timeout_seconds", defaults.timeout_seconds)),
            max_retries=max(0, int(edamam.get("max_retries", defaults.max_retries))),
            backoff_seconds=float(edamam.get("backoff_seconds", defaults.backoff_seconds)),
            max_concurrency=max(1, int(edamam.get("max_concurrency", defaults.max_concurrency))),
        )


def load_settings(config_path: Path | str | None = None) -> EdamamSettings:
    """Read provider settings from config.yaml, then apply env overrides.

    Env overrides:
      - EDAMAM_BASE_URL
      - EDAMAM_TIMEOUT_SECONDS
    """
    try:
        cfg = load_config(config_path or CONFIG_FILE_PATH)
    except FileNotFoundError:
        logger.warning("No config file at %s; using defaults", config_path or CONFIG_FILE_PATH)
        cfg = {}

    edamam = dict(cfg.get("edamam") or {})
    base_url = os.getenv("EDAMAM_BASE_URL")
    if base_url:
        edamam["base_url"] = base_url
    timeout = os.getenv("EDAMAM_TIMEOUT_SECONDS")
    if timeout:
        edamam["timeout_seconds"] = timeout
    return EdamamSettings.from_config({"edamam": edamam})


@dataclass(frozen=True)
class Credentials:
    app_id: str = ""
    app_key: str = ""


def load_credentials(path: Path | str | None = None) -> Credentials:
    """Read API_ID / API_KEY from a dotenv-style key/value file.

    A missing file or key yields an empty string; the request is still sent
    and the provider rejects it.
    """
    path = Path(path or os.getenv("EDAMAM_CREDENTIALS_FILE", DEFAULT_CREDENTIALS_FILE))
    if not path.is_file():
        logger.warning("Credentials file %s not found; requests will be unauthenticated", path)
        return Credentials()

    values = dotenv_values(path)
    return Credentials(
        app_id=values.get("API_ID") or "",
        app_key=values.get("API_KEY") or "",
    )
