"""Exceptions for the mock trip API."""


class MalformedFixtureError(Exception):
    """Raised when the trip fixture cannot be reshaped for the UI."""
    def __init__(self, field: str, message: str = None):
        self.field = field
        self.message = message or f"Fixture field '{field}' is missing or malformed"
        super().__init__(self.message)


class ServerStartError(Exception):
    """Raised when the HTTP listener exits before it is bound."""
    def __init__(self, host: str, port: int, message: str = None):
        self.host = host
        self.port = port
        self.message = message or f"Mock API could not bind to {host}:{port}"
        super().__init__(self.message)
