"""Random Chat — fills the page template for one visitor."""

from functools import lru_cache
from typing import Optional

from randomchat.chats import Chat
from randomchat.config import PAGE_REFRESH_SECONDS, TEMPLATE_PATH

CHAT_MARKER = "<!-- CHAT -->"
ID_MARKER = "<!-- ID -->"
CHAT_STATUS_MARKER = "<!-- CHATSTATUS -->"
REFRESH_MARKER = "<!-- REFRESH -->"

PAIRED_BADGE = '<span style="background-color:MediumSeaGreen;">YES</span>'
UNPAIRED_BADGE = '<span style="background-color:Tomato;">NO</span>'


@lru_cache(maxsize=1)
def load_template(path: str = TEMPLATE_PATH) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


def render_page(identity: str, chat: Optional[Chat]) -> str:
    page = load_template()
    transcript = "".join(chat.render(identity)) if chat is not None else ""
    status = PAIRED_BADGE if chat is not None else UNPAIRED_BADGE

    page = page.replace(ID_MARKER, identity, 1)
    page = page.replace(CHAT_STATUS_MARKER, status, 1)
    page = page.replace(REFRESH_MARKER, str(PAGE_REFRESH_SECONDS), 1)
    return page.replace(CHAT_MARKER, transcript, 1)
