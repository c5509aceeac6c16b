"""Environment variable configuration for the quote lookup.

Settings are loaded in priority order:
  1. Shell environment variables (highest priority)
  2. .env file in current directory
  3. ~/.findmyquote/.env (persistent config, set via `quote env set`)

Run `quote env` to see which settings are configured.
Run `quote env set KEY value` to save a setting persistently.

Known settings:
    QUODB_API_URL          ->  base URL of the quote search service
    API_TIMEOUT            ->  lookup timeout in seconds
    FINDMYQUOTE_PAGE_SIZE  ->  quotes read per turn
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Persistent config location (shared with the CLI session store)
STATE_DIR = Path.home() / ".findmyquote"
PERSISTENT_ENV = STATE_DIR / ".env"

DEFAULT_API_URL = "http://api.quodb.com/search/"
DEFAULT_TIMEOUT = 5.0
DEFAULT_PAGE_SIZE = 1

# Load in reverse priority order (later loads don't overwrite existing)
if PERSISTENT_ENV.exists():
    load_dotenv(PERSISTENT_ENV)

load_dotenv()


# --- Persistent config ---

def save_key(name: str, value: str) -> Path:
    """Save a setting to ~/.findmyquote/.env for persistent use."""
    STATE_DIR.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    replaced = False
    if PERSISTENT_ENV.exists():
        for line in PERSISTENT_ENV.read_text().splitlines():
            if line.startswith(f"{name}="):
                lines.append(f"{name}={value}")
                replaced = True
            else:
                lines.append(line)

    if not replaced:
        lines.append(f"{name}={value}")

    PERSISTENT_ENV.write_text("\n".join(lines) + "\n")

    # Also set in current process
    os.environ[name] = value

    return PERSISTENT_ENV


# --- Accessors ---

def get_api_url() -> str:
    url = os.getenv("QUODB_API_URL", "") or DEFAULT_API_URL
    if not url.startswith(("http://", "https://")):
        raise ValueError(
            f"QUODB_API_URL must be an http(s) URL, got {url!r}. "
            "Run `quote env set QUODB_API_URL <url>` to fix it."
        )
    return url


def get_timeout() -> float:
    raw = os.getenv("API_TIMEOUT", "")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"API_TIMEOUT must be a number of seconds, got {raw!r}") from None
    if timeout <= 0:
        raise ValueError(f"API_TIMEOUT must be positive, got {raw!r}")
    return timeout


def get_page_size() -> int:
    raw = os.getenv("FINDMYQUOTE_PAGE_SIZE", "")
    if not raw:
        return DEFAULT_PAGE_SIZE
    try:
        size = int(raw)
    except ValueError:
        raise ValueError(f"FINDMYQUOTE_PAGE_SIZE must be an integer, got {raw!r}") from None
    if size < 1:
        raise ValueError(f"FINDMYQUOTE_PAGE_SIZE must be at least 1, got {size}")
    return size


# --- Status check ---

VALID_KEYS = {"QUODB_API_URL", "API_TIMEOUT", "FINDMYQUOTE_PAGE_SIZE"}

ENV_VARS = {
    "QUODB_API_URL": {
        "default": DEFAULT_API_URL,
        "description": "Base URL of the QuoDB quote search service",
    },
    "API_TIMEOUT": {
        "default": str(DEFAULT_TIMEOUT),
        "description": "Seconds to wait for a quote lookup before giving up",
    },
    "FINDMYQUOTE_PAGE_SIZE": {
        "default": str(DEFAULT_PAGE_SIZE),
        "description": "Number of movies read back per turn",
    },
}


def check_env() -> list[tuple[str, bool, dict]]:
    """Return list of (var_name, is_set, info) for all known env vars."""
    result = []
    for var, info in ENV_VARS.items():
        is_set = bool(os.getenv(var))
        result.append((var, is_set, info))
    return result
