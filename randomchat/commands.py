"""
Command dispatch — the request path is the command.

    /message hello there   -> send "hello there" to the current chat
    /newChat               -> ask to be paired with the next visitor

Unknown verbs are ignored. The caller is redirected to / after any command.
"""

import logging
import re
from typing import Callable, Dict

from randomchat.exceptions import EmptyCommandError, UnknownCommandError
from randomchat.models import Command
from randomchat.state import AppState

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


def to_command_text(path: str) -> str:
    """Strip the leading slash; the path arrives already percent-decoded."""
    if path.startswith("/"):
        path = path[1:]
    return path


def parse_command(text: str) -> Command:
    if text == "":
        raise EmptyCommandError()
    # split on every whitespace char so repeated spaces survive the join
    words = _WHITESPACE.split(text)
    return Command(verb=words[0], args=words[1:])


def _send_message(state: AppState, identity: str, command: Command) -> None:
    state.chats.send_message(identity, " ".join(command.args))


def _new_chat(state: AppState, identity: str, command: Command) -> None:
    state.matchmaker.request_pairing(identity)


HANDLERS: Dict[str, Callable[[AppState, str, Command], None]] = {
    "message": _send_message,
    "newChat": _new_chat,
}


def execute(state: AppState, identity: str, command: Command) -> None:
    handler = HANDLERS.get(command.verb)
    if handler is None:
        raise UnknownCommandError(command.verb)
    handler(state, identity, command)


def dispatch(state: AppState, identity: str, path: str) -> bool:
    """
    Run the command named by path, if any.

    Returns True when the path carried a command (even an unknown one), so
    the caller knows to redirect back to the page.
    """
    try:
        command = parse_command(to_command_text(path))
    except EmptyCommandError:
        return False

    try:
        execute(state, identity, command)
    except UnknownCommandError as e:
        logger.debug("Ignored request from %s: %s", identity, e)
    return True
