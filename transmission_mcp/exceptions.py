"""
Exceptions raised by the Transmission RPC client.

- TransmissionError: Base exception for all client errors
- TransportError: The daemon could not be reached or answered with something
  that is not a usable RPC response (connection failure, timeout, non-2xx
  status, malformed body, failed session negotiation)
- RpcError: The daemon understood the request but rejected it
- DialectMismatch: The daemon does not recognize the method name in the
  dialect that was tried; handled inside the client and never raised to callers
"""


class TransmissionError(Exception):
    """Base exception for Transmission client errors."""
    pass


class TransportError(TransmissionError):
    """Raised when the daemon cannot be reached or the response is unusable."""
    pass


class RpcError(TransmissionError):
    """Raised when the daemon reports a failure for a request."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class DialectMismatch(TransmissionError):
    """Raised when the daemon does not recognize the requested method name."""
    pass
