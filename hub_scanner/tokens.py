"""Round-robin rotation over a fixed list of hub API tokens."""
import threading
from typing import List, Optional
from hub_scanner.utils import split_csv


class TokenRotator:
    """Thread-safe round-robin token holder.

    One instance is built at startup and handed to the HTTP client; the
    current index lives as long as that instance and is never reset.
    An empty token list is allowed: ``current()`` then returns ``""`` and
    requests go out unauthenticated.
    """
    def __init__(self, tokens: Optional[List[str]] = None):
        self._tokens = [t.strip() for t in (tokens or []) if t and t.strip()]
        self._index = 0
        self._lock = threading.Lock()

    @classmethod
    def from_string(cls, value: str) -> "TokenRotator":
        return cls(split_csv(value))

    def current(self) -> str:
        with self._lock:
            if not self._tokens:
                return ""
            return self._tokens[self._index]

    def rotate(self) -> str:
        with self._lock:
            if not self._tokens:
                return ""
            self._index = (self._index + 1) % len(self._tokens)
            return self._tokens[self._index]

    def count(self) -> int:
        with self._lock:
            return len(self._tokens)

    def index(self) -> int:
        with self._lock:
            return self._index
