import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from hello.fetch import DEFAULT_CONFIG_FILE_PATH, DEFAULT_URL
from hello.fetch.output import COLORS

URL_ENV_VAR = "HELLO_FETCH_URL"
CONFIG_ENV_VAR = "HELLO_FETCH_CONFIG"


@dataclass
class FetchConfig:
    url: Optional[str] = None
    timeout: Optional[float] = None
    color: Optional[str] = None


def default_config_file_path() -> str:
    return os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE_PATH


def load_fetch_config(path: Optional[str] = None) -> FetchConfig:
    """Load config from JSON file. Returns empty FetchConfig if file doesn't exist."""
    expanded = Path(path or default_config_file_path()).expanduser()
    if not expanded.exists():
        return FetchConfig()

    data = json.loads(expanded.read_text())
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in config file {expanded}")

    url = data.get("url")
    if url is not None and not isinstance(url, str):
        raise ValueError(f"Expected a string for 'url' in config file {expanded}, got {url!r}")

    timeout = data.get("timeout")
    if timeout is not None:
        try:
            timeout = float(timeout)
        except (TypeError, ValueError):
            raise ValueError(
                f"Expected a number for 'timeout' in config file {expanded}, got {timeout!r}"
            ) from None

    color = data.get("color")
    if color is not None and (not isinstance(color, str) or color not in COLORS):
        raise ValueError(f"Unknown color '{color}' in config file {expanded}. Expected one of {', '.join(COLORS)}")

    return FetchConfig(url=url, timeout=timeout, color=color)


def resolve_url(config: FetchConfig, url: Optional[str] = None) -> Tuple[str, str]:
    """Resolve which URL to fetch.

    Resolution order:
    1. Explicit url (command line argument)
    2. HELLO_FETCH_URL environment variable
    3. url from config file
    4. DEFAULT_URL

    Returns:
        (url, source) where source names where the url came from
    """
    if url:
        return url, "argument"

    env_url = os.getenv(URL_ENV_VAR)
    if env_url:
        return env_url, "environment"

    if config.url:
        return config.url, "config"

    return DEFAULT_URL, "default"
