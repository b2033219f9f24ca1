"""Application configuration from environment variables and an optional .env file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values, find_dotenv

# Default config values
DEFAULT_WEB_HOST = "0.0.0.0"
DEFAULT_WEB_PORT = 8080
DEFAULT_DEBUG_MODE = False
DEFAULT_REQUEST_TIMEOUT = 10.0


@dataclass
class AppConfig:
    """Application configuration."""

    api_key: str
    web_host: str
    web_port: int
    debug_mode: bool
    maps_api_key: Optional[str] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def defaults(cls) -> AppConfig:
        return cls(
            api_key="",
            web_host=DEFAULT_WEB_HOST,
            web_port=DEFAULT_WEB_PORT,
            debug_mode=DEFAULT_DEBUG_MODE,
            maps_api_key=None,
            request_timeout=DEFAULT_REQUEST_TIMEOUT,
        )


def _number(d: Mapping[str, Optional[str]], key: str, default, cast):
    raw = d.get(key)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {key}: {raw!r}") from None


def _dict_to_config(d: Mapping[str, Optional[str]]) -> AppConfig:
    return AppConfig(
        api_key=d.get("YOUTUBE_API_KEY") or "",
        web_host=d.get("YTMETA_WEB_HOST") or DEFAULT_WEB_HOST,
        web_port=_number(d, "YTMETA_WEB_PORT", DEFAULT_WEB_PORT, int),
        debug_mode=(d.get("YTMETA_DEBUG") or "false").lower() in ("true", "1", "yes"),
        maps_api_key=d.get("YTMETA_MAPS_API_KEY") or None,
        request_timeout=_number(d, "YTMETA_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT, float),
    )


def load_config(
    env_file: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """
    Load config from a .env file overlaid by the process environment.

    Without env_file, the nearest .env in the working directory or one of its
    parents is used. Returns defaults for anything not set.
    """
    if env_file is None:
        found = find_dotenv(usecwd=True)
        env_file = Path(found) if found else None
    values: dict[str, Optional[str]] = {}
    if env_file is not None and env_file.exists():
        values.update(dotenv_values(env_file))
    values.update(os.environ if environ is None else environ)
    return _dict_to_config(values)
