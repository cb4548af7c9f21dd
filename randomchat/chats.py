"""
Chat Store — two-party message logs and the identity -> chat map.

Each Chat carries its own lock so two participants appending at once are
serialized, while unrelated chats never wait on each other (or on pairing).
"""

import html
import logging
import threading
from typing import Dict, Iterator, List, Optional, Tuple

from randomchat.models import Message

logger = logging.getLogger(__name__)

YOU_LINE = '<b style="background-color:DodgerBlue;">you: </b>{text}<br>'
OTHER_LINE = '<b style="background-color:Tomato;">other: </b>{text}<br>'


class Chat:
    def __init__(self, first: str, second: str):
        self._participants = (first, second)
        self._messages: List[Message] = []
        self._lock = threading.Lock()

    @property
    def participants(self) -> Tuple[str, str]:
        return self._participants

    def put_message(self, sender: str, text: str) -> Message:
        message = Message(sender=sender, text=text)
        with self._lock:
            self._messages.append(message)
        return message

    def messages(self) -> List[Message]:
        with self._lock:
            return list(self._messages)

    def render(self, for_identity: str) -> Iterator[str]:
        """
        Yield one HTML line per message, tagged "you" or "other" relative to
        for_identity. Each call walks a fresh snapshot of the log.
        """
        for message in self.messages():
            line = YOU_LINE if message.sender == for_identity else OTHER_LINE
            yield line.format(text=html.escape(message.text))

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)


class ChatStore:
    def __init__(self) -> None:
        self._chats: Dict[str, Chat] = {}
        self._lock = threading.Lock()

    def get(self, identity: str) -> Optional[Chat]:
        with self._lock:
            return self._chats.get(identity)

    def join(self, chat: Chat) -> None:
        """Point both participants at chat, replacing any chat they had."""
        first, second = chat.participants
        with self._lock:
            self._chats[first] = chat
            self._chats[second] = chat

    def leave(self, identity: str) -> Optional[Chat]:
        with self._lock:
            return self._chats.pop(identity, None)

    def send_message(self, identity: str, text: str) -> bool:
        chat = self.get(identity)
        if chat is None:
            logger.debug("Dropped message from %s: not in a chat", identity)
            return False
        chat.put_message(identity, text)
        return True

    def __len__(self) -> int:
        """Number of distinct chats that still have a participant."""
        with self._lock:
            return len({id(chat) for chat in self._chats.values()})
