from __future__ import annotations

import base64
import json
import logging
import typing

import click

from ._exceptions import (
    ConflictingAuthSource,
    ConflictingBodySource,
    InvalidBody,
    MalformedHeader,
    MissingUrl,
)
from ._models import (
    BodyVariant,
    JsonBody,
    Method,
    MultipartBody,
    NoBody,
    RequestSpec,
    TextBody,
    UrlEncodedBody,
)

__all__ = ["basic_auth_header", "build_request", "parse_pair"]

logger = logging.getLogger(__name__)

AUTHORIZATION = "Authorization"


def parse_pair(raw: str, kind: str = "header") -> tuple[str, str]:
    """Split a ``key=value`` argument on its first ``=``."""
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise MalformedHeader(kind, raw)
    return key, value


def _parse_pairs(values: typing.Iterable[str], kind: str) -> tuple[tuple[str, str], ...]:
    return tuple(parse_pair(value, kind) for value in values)


def _prompt_password(user: str) -> str:
    return click.prompt(f"Enter password for {user}", hide_input=True, err=True)


def basic_auth_header(
    user: str,
    password_prompt: typing.Callable[[str], str] | None = None,
) -> str:
    """
    Build a ``Basic`` credential from ``USER[:PASSWORD]``.

    When no password is present, ``password_prompt`` is called with the
    user name to ask for one.
    """
    if ":" not in user:
        prompt = password_prompt or _prompt_password
        user = f"{user}:{prompt(user)}"
    encoded = base64.b64encode(user.encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


def _build_body(
    body: str | None,
    input_data: str | bytes | None,
    form_fields: typing.Sequence[str],
    json_body: bool,
    url_encoded: bool,
) -> BodyVariant:
    sources = [
        name
        for name, given in (
            ("--body", body is not None),
            ("--input", input_data is not None),
            ("--form-field", bool(form_fields)),
        )
        if given
    ]
    if len(sources) > 1:
        raise ConflictingBodySource(
            f"Only one body source may be given, got {' and '.join(sources)}."
        )
    if json_body and url_encoded:
        raise ConflictingBodySource(
            "--json-body and --url-encoded-body cannot be combined."
        )

    if form_fields:
        if json_body or url_encoded:
            flag = "--json-body" if json_body else "--url-encoded-body"
            raise ConflictingBodySource(f"{flag} cannot be combined with form fields.")
        return MultipartBody(_parse_pairs(form_fields, "form field"))

    text = body if body is not None else input_data
    if json_body:
        # An empty JSON body is still a JSON body, and still has to parse.
        payload = text if text is not None else ""
        # json.loads detects the encoding of bytes itself; undecodable input
        # surfaces as a UnicodeDecodeError, which is a ValueError.
        try:
            json.loads(payload)
        except ValueError as exc:
            raise InvalidBody(f"Invalid JSON: {exc}") from exc
        return JsonBody(payload)
    if text is None:
        return NoBody()
    if url_encoded:
        return UrlEncodedBody(text)
    return TextBody(text)


def build_request(
    url: str | None,
    method: str | Method = Method.GET,
    *,
    headers: typing.Sequence[str] = (),
    cookies: typing.Sequence[str] = (),
    query: typing.Sequence[str] = (),
    body: str | None = None,
    input_data: str | bytes | None = None,
    form_fields: typing.Sequence[str] = (),
    json_body: bool = False,
    url_encoded: bool = False,
    auth: str | None = None,
    user: str | None = None,
    password_prompt: typing.Callable[[str], str] | None = None,
) -> RequestSpec:
    """
    Turn raw command line values into a :class:`RequestSpec`.

    Every check happens here, before anything touches the network, and the
    body is validated before any password prompt. ``-a`` and ``--user``
    both replace an ``Authorization`` header given with ``-H``, whatever
    order the flags were written in.
    """
    if url is None or not url.strip():
        raise MissingUrl()

    header_pairs = list(_parse_pairs(headers, "header"))
    cookie_pairs = _parse_pairs(cookies, "cookie")
    query_pairs = _parse_pairs(query, "query parameter")
    request_body = _build_body(body, input_data, form_fields, json_body, url_encoded)

    if auth is not None and user is not None:
        raise ConflictingAuthSource("--auth and --user cannot be combined.")
    authorization = auth
    if user is not None:
        authorization = basic_auth_header(user, password_prompt)
    if authorization is not None:
        header_pairs = [
            (name, value)
            for name, value in header_pairs
            if name.lower() != AUTHORIZATION.lower()
        ]
        header_pairs.append((AUTHORIZATION, authorization))

    spec = RequestSpec(
        url=url.strip(),
        method=Method.parse(method),
        query_params=query_pairs,
        headers=tuple(header_pairs),
        cookies=dict(cookie_pairs),
        body=request_body,
    )
    logger.debug(
        "Built %s %s (%d headers, %d cookies, %d query params, body=%s)",
        spec.method,
        spec.url,
        len(spec.headers),
        len(spec.cookies),
        len(spec.query_params),
        type(spec.body).__name__,
    )
    return spec
