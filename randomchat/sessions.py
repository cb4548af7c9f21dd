"""
Session Manager — anonymous identities keyed by the `id` cookie.

Identities are UUID4 strings minted on first contact. Each session carries
an expiry that slides forward on every request; sessions past their expiry
are swept lazily (at most once per sweep interval) and a stale cookie gets
a fresh identity even before the sweep removes it.
"""

import logging
import threading
import time
import uuid
from typing import Callable, Dict, List, Optional

from randomchat.config import SESSION_TTL_SECONDS, SWEEP_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class SessionManager:
    def __init__(
        self,
        ttl_seconds: int = SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
        on_evict: Optional[Callable[[str], None]] = None,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.sweep_interval = sweep_interval
        self._last_sweep = float("-inf")
        self._clock = clock
        self._on_evict = on_evict
        self._sessions: Dict[str, float] = {}
        self._lock = threading.Lock()

    def resolve_or_create(self, cookie_value: Optional[str]) -> str:
        """
        Return the identity for this request and slide its expiry.

        A cookie naming a live session is reused. Anything else (no cookie,
        a token we never issued, or an expired one) gets a new identity.
        """
        now = self._clock()
        with self._lock:
            expired = self._collect_expired(now)
            if cookie_value and self._sessions.get(cookie_value, now) > now:
                identity = cookie_value
                created = False
            else:
                identity = self._new_identity()
                created = True
            self._sessions[identity] = now + self.ttl_seconds

        if created:
            logger.info("New session %s", identity)
        self._evict(expired)
        return identity

    def _new_identity(self) -> str:
        # caller holds self._lock so check and insert are atomic
        while True:
            identity = str(uuid.uuid4())
            if identity not in self._sessions:
                return identity

    def _collect_expired(self, now: float) -> List[str]:
        # full scans run at most once per sweep_interval
        if now - self._last_sweep < self.sweep_interval:
            return []
        self._last_sweep = now
        expired = [sid for sid, expires in self._sessions.items() if expires <= now]
        for sid in expired:
            del self._sessions[sid]
        return expired

    def _evict(self, expired: List[str]) -> None:
        for identity in expired:
            logger.info("Session %s expired", identity)
            if self._on_evict is not None:
                self._on_evict(identity)

    def expires_at(self, identity: str) -> Optional[float]:
        with self._lock:
            return self._sessions.get(identity)

    def is_active(self, identity: str) -> bool:
        expires = self.expires_at(identity)
        return expires is not None and expires > self._clock()

    def __contains__(self, identity: str) -> bool:
        with self._lock:
            return identity in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
