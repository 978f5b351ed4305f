"""
Runtime configuration for keylight-toggle

Every setting comes from the environment (optionally seeded from a .env
file) and falls back to a default that matches the stock Elgato setup.
"""

import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

SERVICE_TYPE = "_elg._tcp.local."
DEFAULT_PORT = 9123
DEFAULT_HTTP_TIMEOUT = 5.0
DEFAULT_ROUND_INTERVAL = 3.0


@dataclass
class Settings:
    """Resolved settings for one run"""
    service_type: str = SERVICE_TYPE
    port: int = DEFAULT_PORT
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    round_interval: float = DEFAULT_ROUND_INTERVAL
    discovery_timeout: Optional[float] = None


def load_dotenv_file(env_path: str = ".env") -> bool:
    """
    Load a .env file into the process environment if it exists

    Variables already set in the environment win over the file.

    Args:
        env_path: Path to .env file

    Returns:
        True if a file was loaded
    """
    if not os.path.exists(env_path):
        return False

    load_dotenv(env_path, override=False)
    logger.debug(f"Loaded environment from {env_path}")
    return True


def _read_number(env: Mapping[str, str], name: str, default, cast=float):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw.strip())
    except ValueError as e:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from environment variables

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        Settings instance

    Raises:
        ValueError: If a numeric variable cannot be parsed or is not positive
    """
    if env is None:
        env = os.environ

    return Settings(
        service_type=env.get("KEYLIGHT_SERVICE_TYPE") or SERVICE_TYPE,
        port=_read_number(env, "KEYLIGHT_PORT", DEFAULT_PORT, cast=int),
        http_timeout=_read_number(env, "KEYLIGHT_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
        round_interval=_read_number(env, "KEYLIGHT_ROUND_INTERVAL", DEFAULT_ROUND_INTERVAL),
        discovery_timeout=_read_number(env, "KEYLIGHT_DISCOVERY_TIMEOUT", None),
    )
