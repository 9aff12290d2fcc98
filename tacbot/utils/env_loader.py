# tacbot/utils/env_loader.py
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TACBOT_CONFIG"


def ensure_env_loaded(path: str = ".env") -> bool:
    """Load variables from a .env file unless TACBOT_CONFIG is already set."""
    if os.getenv(CONFIG_ENV_VAR):
        return False
    env_path = Path(path).resolve()
    if not env_path.exists():
        logger.debug("Environment file not found at %s", env_path)
        return False
    load_dotenv(dotenv_path=env_path, override=False)
    logger.info("Loaded environment variables from %s", env_path)
    return True


def resolve_config_path(explicit: Optional[str] = None, env_file: str = ".env") -> Optional[Path]:
    """
    Config file to load: explicit argument, else $TACBOT_CONFIG (after .env),
    else None for the packaged default.
    """
    if explicit:
        return Path(explicit)
    ensure_env_loaded(env_file)
    value = os.getenv(CONFIG_ENV_VAR, "").strip()
    return Path(value) if value else None
