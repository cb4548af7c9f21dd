"""
Matchmaker — a single waiting seat that pairs the next two visitors.

Every pairing decision, across all users, runs under one lock so two
requesters can never both see an empty seat or pop the same occupant.
"""

import logging
import threading
from typing import Optional

from randomchat.chats import Chat, ChatStore

logger = logging.getLogger(__name__)


class Matchmaker:
    def __init__(self, chats: ChatStore):
        self._chats = chats
        self._pending: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def waiting(self) -> Optional[str]:
        with self._lock:
            return self._pending

    def is_waiting(self, identity: str) -> bool:
        return self.waiting == identity

    def request_pairing(self, identity: str) -> Optional[Chat]:
        """
        Seat identity, or pair it with whoever is already seated.

        Returns the new Chat when a pair was made, None when identity is
        (still) waiting. A repeated request from the seated identity is a
        no-op. An identity that is already chatting may be paired again;
        its previous chat is left behind.
        """
        with self._lock:
            if self._pending is None:
                self._pending = identity
                logger.info("%s is waiting for a partner", identity)
                return None
            if self._pending == identity:
                return None

            occupant, self._pending = self._pending, None
            chat = Chat(occupant, identity)
            self._chats.join(chat)

        logger.info("Paired %s with %s", occupant, identity)
        return chat

    def release(self, identity: str) -> bool:
        """Empty the seat if identity holds it."""
        with self._lock:
            if self._pending != identity:
                return False
            self._pending = None
            return True
