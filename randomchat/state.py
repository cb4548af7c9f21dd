"""Random Chat — the state one application instance owns."""

import time
from typing import Callable

from randomchat.chats import ChatStore
from randomchat.config import SESSION_TTL_SECONDS
from randomchat.matchmaking import Matchmaker
from randomchat.sessions import SessionManager


class AppState:
    """Sessions, the waiting seat and the chat map, wired together."""

    def __init__(
        self,
        ttl_seconds: int = SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.chats = ChatStore()
        self.matchmaker = Matchmaker(self.chats)
        self.sessions = SessionManager(ttl_seconds, clock=clock, on_evict=self.forget)

    def forget(self, identity: str) -> None:
        """Drop an expired identity from the waiting seat and its chat."""
        self.matchmaker.release(identity)
        self.chats.leave(identity)
