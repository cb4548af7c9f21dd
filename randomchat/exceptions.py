class RandomChatError(Exception):
    """Base class for errors raised inside the chat core."""


class UnknownCommandError(RandomChatError):
    def __init__(self, verb: str):
        super().__init__(f"Unknown command: {verb!r}")
        self.verb = verb


class EmptyCommandError(RandomChatError):
    def __init__(self):
        super().__init__("No command in request path")
