#------------------------------------------------------------
#                       rate_limiter.py
#          Tracks the GitHub request quota and refuses
#              calls while it is known to be spent.

import logging
import math
import time
from typing import Callable, Mapping, Optional
from ..config import ANONYMOUS_RATE_LIMIT
from ..errors import RateLimitExceeded
from ..models import RateLimitState

logger = logging.getLogger(__name__)

REMAINING_HEADER = "X-RateLimit-Remaining"
RESET_HEADER = "X-RateLimit-Reset"
BAD_HEADER_MESSAGE = "Ignoring unparsable %s header: %r"


class RateLimiter:

    def __init__(self, limit: int = ANONYMOUS_RATE_LIMIT, clock: Callable[[], float] = time.time):
        self._state = RateLimitState(remaining=limit)
        self._clock = clock

    # This function does refuse a request while the quota is spent.
    # It passes once the recorded reset time is reached.
    def check_and_throttle(self) -> None:
        reset_at = self._state.reset_at
        if self._state.remaining > 0 or reset_at is None:
            return
        now = self._clock()
        if now < reset_at:
            raise RateLimitExceeded(math.ceil((reset_at - now) / 60))

    # This function does reconcile local state with response headers.
    # Absent or broken headers leave the previous values in place.
    def record_response(self, headers: Optional[Mapping[str, str]]) -> None:
        if not headers:
            return
        remaining = _parse_header(headers, REMAINING_HEADER, int)
        if remaining is not None:
            self._state.remaining = remaining
        reset_at = _parse_header(headers, RESET_HEADER, float)
        if reset_at is not None:
            self._state.reset_at = reset_at
        logger.debug("Rate limit remaining: %s, resets at: %s", self._state.remaining, self._state.reset_at)

    def state(self) -> RateLimitState:
        return RateLimitState(remaining=self._state.remaining, reset_at=self._state.reset_at)


def _parse_header(headers: Mapping[str, str], name: str, convert):
    raw = headers.get(name)
    if raw is None or raw == "":
        return None
    try:
        return convert(raw)
    except (TypeError, ValueError):
        logger.warning(BAD_HEADER_MESSAGE, name, raw)
        return None
