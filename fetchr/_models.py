from __future__ import annotations

import enum
import typing
from dataclasses import dataclass, field

__all__ = [
    "BodyVariant",
    "JsonBody",
    "Method",
    "MultipartBody",
    "NoBody",
    "RequestSpec",
    "ResponseView",
    "TextBody",
    "UrlEncodedBody",
]

Pair = typing.Tuple[str, str]


class Method(str, enum.Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    @classmethod
    def parse(cls, value: str | Method) -> Method:
        """Case-insensitive lookup, so ``patch`` and ``PATCH`` are the same."""
        if isinstance(value, Method):
            return value
        return cls(value.strip().upper())

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Body variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoBody:
    content_type: typing.ClassVar[str | None] = None


@dataclass(frozen=True)
class TextBody:
    """
    Raw body text. Bodies read from a file or stdin stay ``bytes`` and are
    sent untouched.
    """

    text: typing.Union[str, bytes]

    content_type: typing.ClassVar[str | None] = None

    @property
    def content(self) -> bytes:
        if isinstance(self.text, bytes):
            return self.text
        return self.text.encode("utf-8")


@dataclass(frozen=True)
class JsonBody(TextBody):
    """JSON text that has already been parsed successfully once."""

    content_type: typing.ClassVar[str | None] = "application/json"


@dataclass(frozen=True)
class UrlEncodedBody(TextBody):
    content_type: typing.ClassVar[str | None] = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class MultipartBody:
    fields: typing.Tuple[Pair, ...]

    # The boundary is chosen by the encoder, so is the header.
    content_type: typing.ClassVar[str | None] = None


BodyVariant = typing.Union[NoBody, TextBody, JsonBody, UrlEncodedBody, MultipartBody]


# ---------------------------------------------------------------------------
# Request / response
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RequestSpec:
    url: str
    method: Method = Method.GET
    query_params: typing.Tuple[Pair, ...] = ()
    headers: typing.Tuple[Pair, ...] = ()
    cookies: typing.Dict[str, str] = field(default_factory=dict)
    body: BodyVariant = field(default_factory=NoBody)

    def header(self, name: str) -> str | None:
        """Return the last value set for ``name``, compared case-insensitively."""
        value = None
        for key, item in self.headers:
            if key.lower() == name.lower():
                value = item
        return value


@dataclass(frozen=True)
class ResponseView:
    status_code: int
    body: str
    headers: typing.Tuple[Pair, ...] = ()
    reason_phrase: str = ""
    http_version: str = "HTTP/1.1"
    content_type: str = ""
    content: bytes = b""

    @property
    def status_line(self) -> str:
        return f"{self.http_version} {self.status_code} {self.reason_phrase}".rstrip()
