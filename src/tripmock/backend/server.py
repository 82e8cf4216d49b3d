"""
Start and stop helpers for the mock trip API.

The listener runs uvicorn in a background thread so tests and scripts can
bring it up, hit it, and shut it down from synchronous code. start() returns
once the socket is bound and stop() returns once it is closed.
"""

import logging
import threading
import time

import uvicorn
from fastapi import FastAPI

from tripmock.backend.api import create_app, setup_routes
from tripmock.backend.exceptions import ServerStartError
from tripmock.utils.config import LOG_LEVELS, configure_logging, load_settings
from tripmock.utils.constants import DEFAULT_HOST, DEFAULT_LOG_LEVEL, DEFAULT_PORT

logger = logging.getLogger(__name__)

__all__ = ["MockServer", "setup_routes", "start_server", "stop_server", "main"]


class MockServer:
    def __init__(self, app: FastAPI, port: int = DEFAULT_PORT, host: str = DEFAULT_HOST,
                 log_level: str = DEFAULT_LOG_LEVEL):
        self.app = app
        self.host = host
        self.port = port
        self.log_level = LOG_LEVELS.get(log_level.lower(), logging.INFO)
        self._server = None
        self._thread = None

    @property
    def is_listening(self) -> bool:
        return (
            self._server is not None
            and self._server.started
            and self._thread is not None
            and self._thread.is_alive()
        )

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def start(self, timeout: float = 10.0) -> bool:
        if self.is_listening:
            return True

        config = uvicorn.Config(self.app, host=self.host, port=self.port, log_level=self.log_level)
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(target=self._server.run, name=f"tripmock-{self.port}", daemon=True)
        self._thread.start()

        deadline = time.monotonic() + timeout
        while not self._server.started:
            # uvicorn exits the thread when the bind fails
            if not self._thread.is_alive():
                self._server = None
                self._thread = None
                raise ServerStartError(self.host, self.port)
            if time.monotonic() > deadline:
                self.stop()
                raise ServerStartError(self.host, self.port, f"Timed out binding to {self.host}:{self.port}")
            time.sleep(0.01)

        if self.port == 0:
            self.port = self._server.servers[0].sockets[0].getsockname()[1]
        logger.info(f"Mock API listening on port {self.port}")
        return True

    def stop(self, timeout: float = 10.0) -> bool:
        if self._server is None:
            return True

        self._server.should_exit = True
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning(f"Mock API on port {self.port} did not stop in {timeout}s, forcing exit")
            self._server.force_exit = True
            self._thread.join(timeout)

        self._server = None
        self._thread = None
        logger.info(f"Mock API on port {self.port} stopped")
        return True

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False


def start_server(app: FastAPI, port: int = DEFAULT_PORT, host: str = DEFAULT_HOST) -> MockServer:
    """Binds the app to host:port and returns once it is listening."""
    server = MockServer(app, port=port, host=host)
    server.start()
    return server


def stop_server(server: MockServer) -> bool:
    """Closes the listener and returns once the port is released."""
    return server.stop()


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings=settings)
    logger.info(f"Serving {settings.fixture_path} on {settings.host}:{settings.port}")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=LOG_LEVELS.get(settings.log_level, logging.INFO),
    )


if __name__ == "__main__":
    main()
