"""Webhook server lifecycle.

``WebhookServer`` owns one uvicorn server for its whole life. ``run`` serves
it from a separate task, waits for the caller's cancellation event, closes
the server immediately (no graceful drain) and reports the close error and
the serve error together.
"""

import asyncio
import logging
import socket
from enum import Enum
from typing import Optional, Tuple

import uvicorn

from ..collaborators import Downloader, Uploader
from ..common import log_server_message
from ..errors import ServerClosedError, ServerRunError
from .config import ServerOpts
from .handlers import build_router

logger = logging.getLogger(__name__)


class ServerState(Enum):
    """Lifecycle states of a WebhookServer."""

    UNSTARTED = "unstarted"
    SERVING = "serving"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class WebhookServer:
    """Webhook server that triggers the download/upload pipeline."""

    def __init__(
        self,
        opts: ServerOpts,
        downloader: Downloader,
        uploader: Uploader,
        log: Optional[logging.Logger] = None,
    ):
        """Initialize the server. No port is bound until ``run``."""
        self.opts = opts
        self.downloader = downloader
        self.uploader = uploader
        self.logger = log or logger
        self.tls_cert = opts.tls_cert
        self.tls_key = opts.tls_key
        self.host, self.port = opts.host, opts.port
        self.app = build_router(self.logger)
        self.state = ServerState.UNSTARTED

        config = uvicorn.Config(
            self.app,
            host=self.host,
            port=self.port,
            ssl_certfile=self.tls_cert if self.tls_enabled else None,
            ssl_keyfile=self.tls_key if self.tls_enabled else None,
            lifespan="off",
            log_config=None,
        )
        self._server = uvicorn.Server(config=config)
        self._serve_task: Optional[asyncio.Task] = None
        self._bound_address: Optional[Tuple[str, int]] = None
        self._closed = False

    @property
    def tls_enabled(self) -> bool:
        return bool(self.tls_cert) and bool(self.tls_key)

    @property
    def bound_address(self) -> Optional[Tuple[str, int]]:
        """Address the listener is bound to, ``None`` before binding."""
        return self._bound_address

    async def run(self, cancel: asyncio.Event) -> None:
        """Serve until ``cancel`` is set, then shut down.

        Raises ServerRunError when closing the server or serving failed. A
        serve failure such as a bind error also ends the run without waiting
        for ``cancel``.
        """
        if self.state is not ServerState.UNSTARTED:
            raise RuntimeError("WebhookServer.run may only be called once")

        if self.opts.tls_partially_configured:
            self.logger.warning("Only one of TLS certificate and key is set, serving plain HTTP")

        self.state = ServerState.SERVING
        scheme = "https" if self.tls_enabled else "http"
        log_server_message(f"Serving {scheme} on {self.opts.listen_address}", self.logger)

        self._serve_task = asyncio.create_task(self._serve())
        cancel_task = asyncio.create_task(cancel.wait())
        try:
            await asyncio.wait({self._serve_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            cancel_task.cancel()
            await asyncio.wait({cancel_task})
            close_error, serve_error = await self._shutdown()
            for error in (close_error, serve_error):
                if error is not None:
                    self.logger.error(f"Error while stopping cancelled server: {error}")
            raise
        cancel_task.cancel()
        await asyncio.wait({cancel_task})

        close_error, serve_error = await self._shutdown()
        if close_error is not None or serve_error is not None:
            raise ServerRunError(close_error, serve_error)

    async def _shutdown(self) -> Tuple[Optional[Exception], Optional[Exception]]:
        """Close the server, then collect the serve task's result."""
        self.state = ServerState.SHUTTING_DOWN
        log_server_message("Server shutting down", self.logger)

        close_error = None
        try:
            self.close()
        except Exception as e:
            close_error = e

        serve_error = await self._serve_task
        if isinstance(serve_error, ServerClosedError):
            serve_error = None

        self.state = ServerState.STOPPED
        log_server_message("Server stopped", self.logger)
        return close_error, serve_error

    def close(self) -> None:
        """Stop the server immediately, dropping open connections.

        Only the first call has an effect.
        """
        if self._closed:
            return
        self._closed = True
        self._server.should_exit = True
        self._server.force_exit = True
        for connection in list(self._server.server_state.connections):
            transport = getattr(connection, "transport", None)
            if transport is not None:
                transport.close()

    async def _serve(self) -> Optional[Exception]:
        """Serve until closed. Returns the error serving ended with."""
        try:
            if self._closed:
                raise ServerClosedError()
            sock = self._bind()
            try:
                await self._server.serve(sockets=[sock])
            finally:
                # uvicorn skips its own shutdown when closed during startup
                for server in getattr(self._server, "servers", []):
                    server.close()
                sock.close()
            raise ServerClosedError()
        except Exception as e:
            return e

    def _bind(self) -> socket.socket:
        family = socket.AF_INET6 if ":" in self.host else socket.AF_INET
        sock = socket.create_server((self.host, self.port), family=family)
        self._bound_address = sock.getsockname()[:2]
        return sock

    async def wait_until_serving(self, timeout: float = 5.0) -> None:
        """Wait until the server accepts connections.

        Raises ServerClosedError if serving ends first and TimeoutError if
        it has not started within ``timeout`` seconds.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not self._server.started:
            if self._serve_task is not None and self._serve_task.done():
                raise ServerClosedError("server stopped before serving")
            if loop.time() > deadline:
                raise TimeoutError(f"server not serving after {timeout}s")
            await asyncio.sleep(0.01)
