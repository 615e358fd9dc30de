#------------------------------------------------------------
#                       cache_service.py
#        Keeps the last fetched snapshot for one user,
#             in memory and optionally on disk.

import logging
import os
import time
from typing import Callable, Optional
from ..config import CACHE_TTL_SECONDS, load_json, save_json
from ..models import UserData

logger = logging.getLogger(__name__)

CACHE_READ_FAILED_MESSAGE = "Cache read failed, ignoring %s: %s"
CACHE_WRITE_FAILED_MESSAGE = "Cache write failed for %s: %s"
CACHE_CLEAR_FAILED_MESSAGE = "Cache clear failed for %s: %s"


class CacheService:
    """Single-slot, username-keyed snapshot cache.

    Storing a snapshot under a username evicts whatever was there before, even
    when the snapshot names another account. Every storage failure
    is logged and treated as a miss or a no-op; nothing here raises.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        ttl: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.path = path
        self.ttl = ttl
        self._clock = clock
        self._key: Optional[str] = None
        self._entry: Optional[UserData] = None

    def get(self, username: str) -> Optional[UserData]:
        if self._entry is None:
            self._entry = self._read()
            self._key = self._entry.username if self._entry is not None else None
        if self._entry is None or self._key != username:
            return None
        if self._clock() - self._entry.last_fetch >= self.ttl:
            return None
        return self._entry

    def put(self, username: str, user_data: UserData) -> None:
        self._key = username
        self._entry = user_data
        if not self.path:
            return
        try:
            record = user_data.to_record()
            # The slot key wins over the snapshot's own username.
            record["username"] = username
            save_json(self.path, record)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning(CACHE_WRITE_FAILED_MESSAGE, self.path, exc)

    def clear(self) -> None:
        self._key = None
        self._entry = None
        if not self.path:
            return
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning(CACHE_CLEAR_FAILED_MESSAGE, self.path, exc)

    # This function does load the persisted record, if any.
    # Corrupted or foreign-shaped records count as absent.
    def _read(self) -> Optional[UserData]:
        if not self.path or not os.path.exists(self.path):
            return None
        record = load_json(self.path)
        if record is None:
            logger.warning(CACHE_READ_FAILED_MESSAGE, self.path, "not valid JSON")
            return None
        try:
            return UserData.from_record(record)
        except ValueError as exc:
            logger.warning(CACHE_READ_FAILED_MESSAGE, self.path, exc)
            return None
