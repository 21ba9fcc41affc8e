"""Secret and endpoint loading for FitBot.

Keys and URLs are read with this priority:
  1. Environment variables (highest — already set in shell)
  2. ~/.fitbot/keys.env (user-level secrets)
  3. .env in current directory (project-level)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Directory for user-level FitBot configuration
FITBOT_HOME = Path.home() / ".fitbot"
KEYS_FILE = FITBOT_HOME / "keys.env"

SUPABASE_URL_ENV = "SUPABASE_URL"
SUPABASE_KEY_ENV = "SUPABASE_PUBLISHABLE_KEY"
SUPABASE_SERVICE_KEY_ENV = "SUPABASE_SERVICE_ROLE_KEY"
CHAT_URL_ENV = "FITBOT_CHAT_URL"
MODEL_ENV = "FITBOT_MODEL"

# Path of the hosted chat function, relative to the Supabase project URL
CHAT_FUNCTION_PATH = "/functions/v1/fitness-chat"


def load_keys_env() -> None:
    """Load variables from ~/.fitbot/keys.env and .env into os.environ.

    Existing env vars are NOT overwritten, and earlier files win over
    later ones.
    """
    files = [KEYS_FILE, Path.cwd() / ".env"]
    for env_file in files:
        if env_file.is_file():
            _load_env_file(env_file)


def _load_env_file(path: Path) -> None:
    """Parse a simple KEY=VALUE .env file and set vars that aren't already set."""
    try:
        for line in path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip("'\"")
            if key and not os.environ.get(key):
                os.environ[key] = value
                logger.debug("Loaded %s from %s", key, path)
    except OSError:
        logger.debug("Could not read %s", path)


def supabase_credentials(*, service: bool = False) -> tuple[str, str]:
    """Return (project URL, key).

    The publishable key is what end-user clients hold. The service-role
    key is for the API server, which scopes every query to the caller.

    Raises:
        RuntimeError: If either value is missing.
    """
    key_env = SUPABASE_SERVICE_KEY_ENV if service else SUPABASE_KEY_ENV
    url = os.environ.get(SUPABASE_URL_ENV, "")
    key = os.environ.get(key_env, "")
    if not url or not key:
        raise RuntimeError(
            f"Supabase is not configured. Set {SUPABASE_URL_ENV} and "
            f"{key_env} in the environment or {KEYS_FILE}."
        )
    return url, key


def default_chat_url() -> str:
    """Chat endpoint derived from the project URL, or '' if unknown."""
    url = os.environ.get(SUPABASE_URL_ENV, "")
    if not url:
        return ""
    return url.rstrip("/") + CHAT_FUNCTION_PATH
