"""Exceptions raised by hookdl."""

from typing import Optional, Tuple


class HookdlError(Exception):
    """Base class for all hookdl errors."""


class ConfigurationError(HookdlError):
    """Raised when server options cannot be used."""


class PayloadDecodeError(HookdlError):
    """Raised when a webhook request body is not a JSON object."""


class ServerClosedError(HookdlError):
    """Raised by the serve task when the server was stopped on purpose."""

    def __init__(self, message: str = "server closed"):
        super().__init__(message)


class ServerRunError(HookdlError):
    """Combined outcome of a failed server run.

    Holds the error raised while closing the server and the error the serve
    task ended with. Either may be ``None``, never both.
    """

    def __init__(
        self,
        close_error: Optional[BaseException] = None,
        serve_error: Optional[BaseException] = None,
    ):
        if close_error is None and serve_error is None:
            raise ValueError("ServerRunError needs at least one error")
        self.close_error = close_error
        self.serve_error = serve_error
        super().__init__("; ".join(str(e) or type(e).__name__ for e in self.errors))
        self.__cause__ = self.errors[0]

    @property
    def errors(self) -> Tuple[BaseException, ...]:
        """Present component errors, close error first."""
        return tuple(e for e in (self.close_error, self.serve_error) if e is not None)
