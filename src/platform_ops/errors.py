"""
Platform Ops error classes.

Provides a clear taxonomy of the failures a remote operation can end in.
Transport problems, server-reported errors, missing response fields and
invalid configuration are kept as distinct types so callers can tell
"the call failed" apart from "the call worked but the answer is bad".
"""
from __future__ import annotations

from typing import Iterable, Sequence


class PlatformError(Exception):
    """Base class for all Platform Ops errors."""
    pass


class TransportError(PlatformError):
    """
    Network or protocol failure talking to the control plane.

    Raised when:
    - Connection refused, DNS failure, timeout
    - Response body is not a JSON object (malformed framing)
    - HTTP error status without a remote error list
    """
    pass


class RemoteError(PlatformError):
    """
    The control plane answered with a non-empty error list.

    The messages are kept in server order and never reinterpreted.
    """

    def __init__(self, messages: Iterable[str]):
        self.messages = tuple(messages)
        super().__init__("; ".join(self.messages) or "remote error")


class MissingFieldError(PlatformError):
    """
    An expected field was absent or null in an otherwise successful response.

    Raised when:
    - The id did not resolve to the expected node type
    - An optional relation (e.g. an app role) is unset
    - The response could not be coerced into the expected result shape
    """

    def __init__(self, path: str, missing: str | None = None):
        self.path = path
        self.missing = missing or path
        if self.missing == self.path:
            message = f"Response field '{path}' is missing or null"
        else:
            message = f"Response field '{path}' is missing or null (at '{self.missing}')"
        super().__init__(message)


class ValidationFailed(PlatformError):
    """
    The remote validator rejected a configuration definition.

    Carries the already formatted error lines, one per remote error.
    """

    def __init__(self, errors: Sequence[str], message: str = "App configuration is not valid"):
        super().__init__(message)
        self.errors = list(errors)


class AppConfigNotFound(PlatformError):
    """The local app configuration file does not exist."""
    pass


__all__ = [
    "PlatformError",
    "TransportError",
    "RemoteError",
    "MissingFieldError",
    "ValidationFailed",
    "AppConfigNotFound",
]
