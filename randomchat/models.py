"""Random Chat — data models."""

from typing import List

from pydantic import BaseModel, ConfigDict


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    sender: str
    text: str


class Command(BaseModel):
    model_config = ConfigDict(frozen=True)

    verb: str
    args: List[str] = []


class HealthResponse(BaseModel):
    status: str
    service: str
    sessions: int
    chats: int
    waiting: bool
