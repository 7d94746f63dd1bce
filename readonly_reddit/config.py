"""
Settings loaded from the environment and an optional ``.env`` file.

Required:
  - REDDIT_CLIENT_ID
  - REDDIT_CLIENT_SECRET
Optional:
  - REDDIT_USER_AGENT (default: 'readonly-reddit/1.0')
  - REDDIT_THROTTLE_SECONDS (default: 0, throttle disabled)
  - REDDIT_TIMEOUT_SECONDS (default: 30)
  - LOG_LEVEL (default: INFO)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from readonly_reddit.reddit.exceptions import ValidationError

DEFAULT_USER_AGENT = "readonly-reddit/1.0"


@dataclass(frozen=True)
class Settings:
    reddit_client_id: str
    reddit_client_secret: str
    user_agent: str = DEFAULT_USER_AGENT
    throttle_seconds: float = 0.0
    timeout_seconds: float = 30.0
    log_level: str = "INFO"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValidationError(f"not a number: {raw!r}", field=name) from e
    if value < 0:
        raise ValidationError("must not be negative", field=name)
    return value


def get_settings(env_file: Optional[Path] = Path(".env")) -> Settings:
    """
    Load credentials and client settings.

    Values already present in the environment win over the ``.env`` file.

    Args:
        env_file: Optional dotenv file to load first (skipped if missing)

    Returns:
        Settings instance

    Raises:
        ValidationError: If required variables are missing or malformed
    """
    if env_file and env_file.exists():
        load_dotenv(dotenv_path=env_file)

    client_id = os.getenv("REDDIT_CLIENT_ID", "").strip()
    client_secret = os.getenv("REDDIT_CLIENT_SECRET", "").strip()
    user_agent = os.getenv("REDDIT_USER_AGENT", DEFAULT_USER_AGENT).strip()

    missing = []
    if not client_id:
        missing.append("REDDIT_CLIENT_ID")
    if not client_secret:
        missing.append("REDDIT_CLIENT_SECRET")
    if missing:
        raise ValidationError(
            f"Missing required environment variables: {', '.join(missing)}. "
            "Set them in .env or your shell environment."
        )

    return Settings(
        reddit_client_id=client_id,
        reddit_client_secret=client_secret,
        user_agent=user_agent or DEFAULT_USER_AGENT,
        throttle_seconds=_float_env("REDDIT_THROTTLE_SECONDS", 0.0),
        timeout_seconds=_float_env("REDDIT_TIMEOUT_SECONDS", 30.0),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip() or "INFO",
    )
