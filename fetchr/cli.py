from __future__ import annotations

import logging
import os
import sys
import typing

import click
from rich.console import Console
from rich.text import Text

from .__version__ import __version__
from ._builder import build_request
from ._dispatch import DEFAULT_MAX_REDIRECTS, DEFAULT_TIMEOUT, dispatch
from ._exceptions import FetchrError
from ._models import Method
from ._output import format_response_plain, print_response_rich

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        stream=sys.stderr,
        format=LOG_FORMAT,
    )


def _use_rich(no_color: bool) -> bool:
    return not no_color and "NO_COLOR" not in os.environ and sys.stdout.isatty()


def _report_error(exc: FetchrError, use_rich: bool) -> typing.NoReturn:
    if use_rich:
        console = Console(stderr=True)
        error_text = Text()
        error_text.append("Error:", style="bold red")
        error_text.append(f" {exc.message}")
        console.print(error_text)
    else:
        click.echo(f"Error: {exc.message}", err=True)
    sys.exit(exc.exit_code)


# ---------------------------------------------------------------------------
# CLI command
# ---------------------------------------------------------------------------


@click.command(
    help="A small command line HTTP client.",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.argument("url", required=False)
@click.option(
    "-m",
    "--method",
    default=Method.GET.value,
    show_default=True,
    type=click.Choice([method.value for method in Method], case_sensitive=False),
    help="HTTP method.",
)
@click.option(
    "-H",
    "--header",
    "headers",
    multiple=True,
    metavar="NAME=VALUE",
    help="Add a header to the request.",
)
@click.option(
    "-c",
    "--cookie",
    "cookies",
    multiple=True,
    metavar="NAME=VALUE",
    help="Add a cookie to the request.",
)
@click.option(
    "-q",
    "--query",
    "query",
    multiple=True,
    metavar="KEY=VALUE",
    help="Add a query parameter to the URL.",
)
@click.option("-b", "--body", default=None, help="Request body contents.")
@click.option(
    "-i",
    "--input",
    "input_file",
    type=click.File("rb"),
    default=None,
    help="Read the request body from a file (- for stdin).",
)
@click.option(
    "-F",
    "--form-field",
    "--form",
    "form_fields",
    multiple=True,
    metavar="KEY=VALUE",
    help="Add a multipart form field. Sets a multipart/form-data body.",
)
@click.option(
    "-j",
    "--json-body",
    is_flag=True,
    default=False,
    help="The body is JSON. Sets content-type and refuses malformed JSON.",
)
@click.option(
    "--url-encoded-body",
    is_flag=True,
    default=False,
    help="The body is URL encoded. Sets content-type accordingly.",
)
@click.option(
    "-a",
    "--auth",
    default=None,
    metavar="VALUE",
    help="Shorthand for the Authorization header, e.g. -a 'Bearer token'.",
)
@click.option(
    "--user",
    default=None,
    metavar="USER[:PASSWORD]",
    help="HTTP Basic authentication. Prompts for the password if omitted.",
)
@click.option(
    "--print-headers", is_flag=True, default=False, help="Print response headers."
)
@click.option(
    "--pretty", is_flag=True, default=False, help="Indent JSON response bodies."
)
@click.option(
    "--no-follow", is_flag=True, default=False, help="Do not follow redirects."
)
@click.option(
    "--max-redirs",
    "max_redirects",
    default=DEFAULT_MAX_REDIRECTS,
    show_default=True,
    envvar="FETCHR_MAX_REDIRS",
    type=click.IntRange(min=0),
    help="Maximum number of redirects to follow.",
)
@click.option(
    "-t",
    "--timeout",
    default=DEFAULT_TIMEOUT,
    show_default=True,
    envvar="FETCHR_TIMEOUT",
    type=click.FloatRange(min=0, min_open=True),
    help="Timeout in seconds.",
)
@click.option(
    "--no-color", is_flag=True, default=False, help="Disable colored output."
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose output.")
@click.version_option(__version__, prog_name="fetchr")
def main(
    url: str | None,
    method: str,
    headers: tuple[str, ...],
    cookies: tuple[str, ...],
    query: tuple[str, ...],
    body: str | None,
    input_file: typing.BinaryIO | None,
    form_fields: tuple[str, ...],
    json_body: bool,
    url_encoded_body: bool,
    auth: str | None,
    user: str | None,
    print_headers: bool,
    pretty: bool,
    no_follow: bool,
    max_redirects: int,
    timeout: float,
    no_color: bool,
    verbose: bool,
) -> None:
    _configure_logging(verbose)
    use_rich = _use_rich(no_color)

    try:
        spec = build_request(
            url,
            method,
            headers=headers,
            cookies=cookies,
            query=query,
            body=body,
            input_data=input_file.read() if input_file is not None else None,
            form_fields=form_fields,
            json_body=json_body,
            url_encoded=url_encoded_body,
            auth=auth,
            user=user,
        )
        response = dispatch(
            spec,
            include_headers=print_headers,
            timeout=timeout,
            follow_redirects=not no_follow,
            max_redirects=max_redirects,
        )
    except FetchrError as exc:
        logger.debug("Request failed", exc_info=True)
        _report_error(exc, use_rich)

    if use_rich:
        print_response_rich(
            Console(), response, print_headers=print_headers, pretty=pretty
        )
    else:
        click.echo(
            format_response_plain(response, print_headers=print_headers, pretty=pretty)
        )
