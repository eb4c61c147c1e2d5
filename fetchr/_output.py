from __future__ import annotations

import json

from rich.console import Console
from rich.syntax import Syntax
from rich.text import Text

from ._models import ResponseView

__all__ = [
    "format_response_plain",
    "is_binary_content",
    "is_binary_content_type",
    "print_response_rich",
]


def _status_color(status_code: int) -> str:
    """Return a rich color name based on HTTP status category."""
    if status_code < 200:
        return "cyan"
    elif status_code < 300:
        return "green"
    elif status_code < 400:
        return "yellow"
    elif status_code < 500:
        return "red"
    else:
        return "bold red"


def is_binary_content(content: bytes) -> bool:
    return b"\0" in content


def is_binary_content_type(content_type: str) -> bool:
    text_types = (
        "text/",
        "application/json",
        "application/xml",
        "application/javascript",
        "application/ecmascript",
        "application/x-www-form-urlencoded",
    )
    ct = content_type.lower().split(";")[0].strip()
    return not any(ct.startswith(t) for t in text_types) and ct != ""


def _is_json(content_type: str) -> bool:
    ct = content_type.lower().split(";")[0].strip()
    return ct == "application/json" or ct.endswith("+json")


def _pretty_json(text: str) -> str | None:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return json.dumps(data, indent=4, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Plain-text formatter (used with --no-color or when stdout is not a tty)
# ---------------------------------------------------------------------------


def format_response_plain(
    response: ResponseView,
    print_headers: bool = False,
    pretty: bool = False,
) -> str:
    lines: list[str] = [response.status_line]

    if print_headers:
        for key, value in response.headers:
            lines.append(f"{key}: {value}")

    lines.append("")

    body = response.body
    if pretty and body and _is_json(response.content_type):
        body = _pretty_json(body) or body
    lines.append(body)

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Rich formatter
# ---------------------------------------------------------------------------


def print_response_rich(
    console: Console,
    response: ResponseView,
    print_headers: bool = False,
    pretty: bool = False,
) -> None:
    """Pretty-print a response using rich."""
    color = _status_color(response.status_code)

    status_line = Text()
    status_line.append(f"{response.http_version} ", style="bold dim")
    status_line.append(f"{response.status_code}", style=f"bold {color}")
    if response.reason_phrase:
        status_line.append(f" {response.reason_phrase}", style=color)
    console.print(status_line)

    if print_headers:
        for key, value in response.headers:
            header_text = Text()
            header_text.append(f"{key}", style="dim cyan")
            header_text.append(": ", style="dim")
            header_text.append(value)
            console.print(header_text)

    console.print()

    content = response.content
    if not response.body:
        return
    if is_binary_content_type(response.content_type) or is_binary_content(content):
        console.print(f"[dim]<{len(content)} bytes of binary data>[/dim]")
        return
    if pretty and _is_json(response.content_type):
        formatted = _pretty_json(response.body)
        if formatted is not None:
            console.print(Syntax(formatted, "json", theme="monokai"))
            return
    # Verbatim: no markup, highlighting or hard wrapping applied to the body.
    console.print(Text(response.body), soft_wrap=True)
