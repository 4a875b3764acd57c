# agri_advisor/core/rate_limit.py
"""
Fixed-window request rate limiting
"""
import threading
from typing import Dict, List, Tuple

from cachetools import TTLCache


class RateLimiter:
    """Per-client request counter backed by a TTL cache.

    Each client gets a counter that lives for ``window_seconds`` from its
    first request; the counter is mutated in place so the cache entry keeps
    its original expiry.
    """

    def __init__(self, max_requests: int, window_seconds: int, max_clients: int = 10000):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._hits: Dict[str, List[int]] = TTLCache(maxsize=max_clients, ttl=window_seconds)
        self._lock = threading.Lock()

    def check_rate_limit(self, client_ip: str, path: str) -> Tuple[bool, str]:
        """Record a hit and report whether the client is still within its budget"""
        with self._lock:
            counter = self._hits.get(client_ip)
            if counter is None:
                counter = [0]
                self._hits[client_ip] = counter
            counter[0] += 1
            count = counter[0]

        if count > self.max_requests:
            return False, (
                f"Rate limit exceeded for {path}: "
                f"{self.max_requests} requests per {self.window_seconds}s"
            )
        return True, ""

    def remaining(self, client_ip: str) -> int:
        counter = self._hits.get(client_ip)
        used = counter[0] if counter else 0
        return max(self.max_requests - used, 0)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
