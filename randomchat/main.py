"""
Random Chat Service
Handles: anonymous sessions, pairing two visitors, two-party chat pages
Port: $PORT (default 80)

Every request resolves a session identity from the `id` cookie (minting one
when needed) and refreshes the cookie. The request path is read as at most
one command; after a command the visitor is redirected back to /, and / itself
renders the visitor's chat page.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool

from randomchat import __version__
from randomchat.commands import dispatch
from randomchat.config import HOST, LOG_LEVEL, PORT, SESSION_COOKIE
from randomchat.dependencies import current_identity, get_state
from randomchat.models import HealthResponse
from randomchat.rendering import render_page
from randomchat.state import AppState

logger = logging.getLogger(__name__)

HEALTH_PATH = "/health"


# ── App ───────────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("[randomchat] Started on port %s", PORT)
    yield


def create_app(state: Optional[AppState] = None) -> FastAPI:
    app = FastAPI(
        title="Random Chat",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.chat = state if state is not None else AppState()

    @app.middleware("http")
    async def session_cookie(request: Request, call_next):
        if request.url.path == HEALTH_PATH:
            return await call_next(request)

        sessions = request.app.state.chat.sessions
        # may block on the pairing lock when an expired session is evicted
        identity = await run_in_threadpool(
            sessions.resolve_or_create, request.cookies.get(SESSION_COOKIE)
        )
        request.state.identity = identity

        response = await call_next(request)
        response.set_cookie(
            SESSION_COOKIE,
            identity,
            max_age=sessions.ttl_seconds,
            path="/",
            httponly=True,
            samesite="lax",
        )
        return response

    # ── Endpoints ─────────────────────────────────────────────────────────────

    @app.get(HEALTH_PATH, response_model=HealthResponse)
    def health(state: AppState = Depends(get_state)):
        return {
            "status": "ok",
            "service": "randomchat",
            "sessions": len(state.sessions),
            "chats": len(state.chats),
            "waiting": state.matchmaker.waiting is not None,
        }

    @app.get("/{path:path}", response_class=HTMLResponse)
    def chat_page(
        path: str,
        state: AppState = Depends(get_state),
        identity: str = Depends(current_identity),
    ):
        if dispatch(state, identity, path):
            return RedirectResponse("/", status_code=302)
        return HTMLResponse(render_page(identity, state.chats.get(identity)))

    return app


app = create_app()


def main() -> None:  # pragma: no cover
    import uvicorn

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run("randomchat.main:app", host=HOST, port=PORT)


if __name__ == "__main__":  # pragma: no cover
    main()
