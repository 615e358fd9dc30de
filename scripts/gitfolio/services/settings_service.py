#------------------------------------------------------------
#                     settings_service.py
#        Loads and saves the caller's portfolio settings.

import logging
import os
from ..config import load_json, save_json
from ..models import Settings

logger = logging.getLogger(__name__)

SETTINGS_READ_FAILED_MESSAGE = "Saved settings at %s are unreadable; using defaults"
SETTINGS_WRITE_FAILED_MESSAGE = "Could not save settings to %s: %s"


# This function does load the saved settings record.
# Missing or invalid fields fall back to their defaults.
def load_settings(path: str) -> Settings:
    data = load_json(path)
    if data is None:
        if path and os.path.exists(path):
            logger.warning(SETTINGS_READ_FAILED_MESSAGE, path)
        return Settings()
    if not isinstance(data, dict):
        logger.warning(SETTINGS_READ_FAILED_MESSAGE, path)
        return Settings()
    return Settings.from_dict(data)


# This function does persist settings best-effort.
# Write failures are logged and reported as False.
def save_settings(path: str, settings: Settings) -> bool:
    try:
        save_json(path, settings.to_dict())
    except (OSError, TypeError, ValueError) as exc:
        logger.warning(SETTINGS_WRITE_FAILED_MESSAGE, path, exc)
        return False
    return True
