import logging
from typing import Callable, Optional, Tuple

from core.config import settings
from schemas.usage import TokenUsage
from stores.documents import DocumentStore
from utils.textutils import now_ms

logger = logging.getLogger(__name__)

COLLECTION = "tokenUsage"
HOUR_MS = 60 * 60 * 1000


def apply_rolling_window(count: int, last_updated: int, now: int,
                         window_ms: int = 24 * HOUR_MS) -> Tuple[int, int]:
    """Return the (count, window start) in effect at ``now``.

    Once more than ``window_ms`` has passed since the window started, the
    counter starts over at zero with a new window beginning at ``now``.
    """
    if now - last_updated > window_ms:
        return 0, now
    return count, last_updated


class TokenUsageService:
    """Per-user running total of LLM tokens over a rolling window."""

    def __init__(self, documents: DocumentStore, clock: Callable[[], int] = now_ms,
                 window_hours: Optional[int] = None):
        self.documents = documents
        self.clock = clock
        self.window_ms = (window_hours or settings.token_window_hours) * HOUR_MS

    def _current(self, user_id: str) -> TokenUsage:
        now = self.clock()
        doc = self.documents.get(COLLECTION, user_id)
        if doc is None:
            return TokenUsage(count=0, lastUpdated=now)

        stored = TokenUsage.model_validate(doc)
        count, started = apply_rolling_window(stored.count, stored.lastUpdated, now, self.window_ms)
        usage = TokenUsage(count=count, lastUpdated=started)
        if usage != stored:
            logger.info("Token window expired for user %s; resetting %d -> 0", user_id, stored.count)
            self.documents.set(COLLECTION, user_id, usage.model_dump(), user_id=user_id)
        return usage

    def get(self, user_id: str) -> int:
        return self._current(user_id).count

    def usage(self, user_id: str) -> TokenUsage:
        return self._current(user_id)

    def add(self, user_id: str, tokens: int) -> int:
        if tokens <= 0:
            return self.get(user_id)
        usage = self._current(user_id)
        usage.count += tokens
        self.documents.set(COLLECTION, user_id, usage.model_dump(), user_id=user_id)
        return usage.count

    def reset(self, user_id: str) -> None:
        usage = TokenUsage(count=0, lastUpdated=self.clock())
        self.documents.set(COLLECTION, user_id, usage.model_dump(), user_id=user_id)
