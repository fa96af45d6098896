"""Settings and logging setup for clockiReport."""
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

ENV_FILE = "clockireport.env"

logger = logging.getLogger(__name__)


def load_environment(path: Optional[str] = None) -> Optional[str]:
    """Load settings from a clockireport.env file into the environment.

    Looks at ``path`` if given, otherwise the project root and then the
    current directory. Variables already set in the environment win.

    Returns:
        Path of the file that was loaded, or None when none exists
    """
    if path:
        candidates = [path]
    else:
        root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        candidates = [os.path.join(root, ENV_FILE), os.path.join(os.getcwd(), ENV_FILE)]

    for candidate in candidates:
        if os.path.exists(candidate):
            load_dotenv(candidate)
            logger.debug("loaded settings from %s", candidate)
            return candidate
    return None


def get_setting(key: str, required: bool = False, default: Optional[str] = None) -> Optional[str]:
    """Read a setting from the environment.

    Args:
        key: Environment variable name
        required: Raise when the variable is missing or empty
        default: Value used when the variable is not set

    Raises:
        ConfigError: If a required setting is missing
    """
    value = os.getenv(key)
    if not value:
        if required:
            raise ConfigError(f"Set {key} in your environment or {ENV_FILE}.")
        return default
    return value


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr so report output stays clean."""
    if verbose:
        level = logging.DEBUG
    else:
        name = (get_setting("CLOCKIREPORT_LOG_LEVEL") or "WARNING").upper()
        level = getattr(logging, name, logging.WARNING)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
