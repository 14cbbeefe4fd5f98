"""Application-boundary helpers: the shared binder and `.env` loading.

Library code should receive an `EnvBinder` explicitly. These helpers are for
the entry point of an application that wants one binder for the whole process.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from .binder import EnvBinder

logger = logging.getLogger(__name__)

_default_binder: Optional[EnvBinder] = None
_default_lock = threading.Lock()


def get_default_binder() -> EnvBinder:
    """Return the process-wide binder, creating it on first use.

    The binder reads the live `os.environ`.
    """
    global _default_binder
    with _default_lock:
        if _default_binder is None:
            _default_binder = EnvBinder()
        return _default_binder


def reset_default_binder() -> None:
    """Discard the process-wide binder and its aliases."""
    global _default_binder
    with _default_lock:
        _default_binder = None


def load_env_file(path: Union[str, os.PathLike] = ".env", override: bool = False) -> bool:
    """Load a `.env` file into `os.environ`.

    Args:
        path: Path of the env file
        override: Replace variables that are already set

    Returns:
        Whether the file existed and was loaded
    """
    env_path = Path(path)

    if not env_path.is_file():
        logger.info("Environment file %s does not exist", env_path)
        return False

    load_dotenv(env_path, override=override)
    logger.debug("Loaded environment file %s", env_path)
    return True
