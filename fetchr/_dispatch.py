from __future__ import annotations

import logging
import typing

import httpx

from ._exceptions import InvalidUrl, NetworkError, TransportTimeout
from ._models import (
    BodyVariant,
    JsonBody,
    MultipartBody,
    NoBody,
    RequestSpec,
    ResponseView,
    TextBody,
    UrlEncodedBody,
)

__all__ = [
    "DEFAULT_MAX_REDIRECTS",
    "DEFAULT_TIMEOUT",
    "build_httpx_request",
    "dispatch",
]

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_REDIRECTS = 10


def _body_kwargs(body: BodyVariant) -> dict[str, typing.Any]:
    if isinstance(body, NoBody):
        return {}
    if isinstance(body, (TextBody, JsonBody, UrlEncodedBody)):
        return {"content": body.content}
    if isinstance(body, MultipartBody):
        # A ``None`` filename makes httpx emit a plain form field rather
        # than a file part, so no filename or content type is attached.
        return {"files": [(name, (None, value)) for name, value in body.fields]}
    raise TypeError(f"Unknown body variant: {body!r}")


def _merge_headers(spec: RequestSpec) -> list[tuple[bytes, bytes]]:
    """
    Final header list, encoded as UTF-8 bytes.

    httpx only accepts ASCII for ``str`` header values, so values such as
    ``X-Name=café`` are handed over pre-encoded.
    """
    pairs = list(spec.headers)

    if spec.cookies:
        cookies = [value for name, value in pairs if name.lower() == "cookie"]
        cookies.extend(f"{name}={value}" for name, value in spec.cookies.items())
        pairs = [(name, value) for name, value in pairs if name.lower() != "cookie"]
        pairs.append(("Cookie", "; ".join(cookies)))

    content_type = spec.body.content_type
    if content_type is not None and not any(
        name.lower() == "content-type" for name, _ in pairs
    ):
        pairs.append(("Content-Type", content_type))

    return [(name.encode("utf-8"), value.encode("utf-8")) for name, value in pairs]


def _merge_params(spec: RequestSpec) -> list[tuple[str, str]] | None:
    # httpx replaces the URL's own query string when ``params`` is given,
    # so the existing pairs have to be carried over explicitly.
    if not spec.query_params:
        return None
    return httpx.URL(spec.url).params.multi_items() + list(spec.query_params)


def build_httpx_request(client: httpx.Client, spec: RequestSpec) -> httpx.Request:
    """Serialize ``spec`` into the request ``client`` will send."""
    try:
        return client.build_request(
            spec.method.value,
            spec.url,
            params=_merge_params(spec),
            headers=_merge_headers(spec),
            **_body_kwargs(spec.body),
        )
    except httpx.InvalidURL as exc:
        raise InvalidUrl(f"Invalid URL '{spec.url}': {exc}") from exc


def _to_view(response: httpx.Response, include_headers: bool) -> ResponseView:
    return ResponseView(
        status_code=response.status_code,
        body=response.text,
        headers=tuple(response.headers.multi_items()) if include_headers else (),
        reason_phrase=response.reason_phrase,
        http_version=response.http_version,
        content_type=response.headers.get("content-type", ""),
        content=response.content,
    )


def dispatch(
    spec: RequestSpec,
    *,
    include_headers: bool = False,
    timeout: float | None = DEFAULT_TIMEOUT,
    follow_redirects: bool = True,
    max_redirects: int = DEFAULT_MAX_REDIRECTS,
    transport: httpx.BaseTransport | None = None,
) -> ResponseView:
    """
    Send ``spec`` exactly once and return what came back.

    Any status code counts as a completed exchange. Only failures to
    complete it at all are raised, as :class:`NetworkError`,
    :class:`TransportTimeout` or :class:`InvalidUrl`.
    """
    with httpx.Client(
        timeout=timeout,
        follow_redirects=follow_redirects,
        max_redirects=max_redirects,
        transport=transport,
    ) as client:
        request = build_httpx_request(client, spec)
        logger.debug("Sending %s %s", request.method, request.url)
        try:
            response = client.send(request)
        except httpx.TimeoutException as exc:
            logger.warning("Timed out: %s %s", request.method, request.url)
            raise TransportTimeout(f"Request timed out: {exc}") from exc
        except httpx.UnsupportedProtocol as exc:
            raise InvalidUrl(f"Invalid URL '{spec.url}': {exc}") from exc
        except httpx.HTTPError as exc:
            logger.warning(
                "%s while sending %s %s", type(exc).__name__, request.method, request.url
            )
            raise NetworkError(f"{type(exc).__name__}: {exc}") from exc

        logger.debug(
            "Received %s %s %s",
            response.http_version,
            response.status_code,
            response.reason_phrase,
        )
        return _to_view(response, include_headers)
