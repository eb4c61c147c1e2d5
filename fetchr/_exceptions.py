"""
Our exception hierarchy:

* FetchrError
  + RequestBuildError
    - MissingUrl
    - MalformedHeader
    - ConflictingBodySource
    - ConflictingAuthSource
    - InvalidBody
  + DispatchError
    - InvalidUrl
    - NetworkError
      · TransportTimeout

Every class carries the process exit code the CLI uses for it.
"""

from __future__ import annotations

__all__ = [
    "ConflictingAuthSource",
    "ConflictingBodySource",
    "DispatchError",
    "FetchrError",
    "InvalidBody",
    "InvalidUrl",
    "MalformedHeader",
    "MissingUrl",
    "NetworkError",
    "RequestBuildError",
    "TransportTimeout",
]


class FetchrError(Exception):
    exit_code: int = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RequestBuildError(FetchrError):
    """
    Raised before any network I/O, while turning options into a request.
    """


class MissingUrl(RequestBuildError):
    exit_code = 10

    def __init__(self, message: str = "No URL given.") -> None:
        super().__init__(message)


class MalformedHeader(RequestBuildError):
    """
    A ``-H``, ``-c``, ``-q`` or ``-F`` value without the ``key=value`` shape.
    """

    exit_code = 3

    def __init__(self, kind: str, raw: str) -> None:
        super().__init__(f'Invalid {kind}: "{raw}". Expected KEY=VALUE.')
        self.kind = kind
        self.raw = raw


class ConflictingBodySource(RequestBuildError):
    exit_code = 4


class InvalidBody(RequestBuildError):
    exit_code = 5


class ConflictingAuthSource(RequestBuildError):
    exit_code = 9


class DispatchError(FetchrError):
    """
    Raised when the exchange itself could not complete.
    """


class NetworkError(DispatchError):
    exit_code = 6


class TransportTimeout(NetworkError):
    exit_code = 7


class InvalidUrl(DispatchError):
    exit_code = 8
