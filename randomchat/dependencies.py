from fastapi import Request

from randomchat.state import AppState


def get_state(request: Request) -> AppState:
    return request.app.state.chat


def current_identity(request: Request) -> str:
    # set by the session cookie middleware before any route runs
    return request.state.identity
