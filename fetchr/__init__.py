from .__version__ import __description__, __title__, __version__
from ._builder import basic_auth_header, build_request, parse_pair
from ._dispatch import build_httpx_request, dispatch
from ._exceptions import (
    ConflictingAuthSource,
    ConflictingBodySource,
    DispatchError,
    FetchrError,
    InvalidBody,
    InvalidUrl,
    MalformedHeader,
    MissingUrl,
    NetworkError,
    RequestBuildError,
    TransportTimeout,
)
from ._models import (
    BodyVariant,
    JsonBody,
    Method,
    MultipartBody,
    NoBody,
    RequestSpec,
    ResponseView,
    TextBody,
    UrlEncodedBody,
)
from ._output import format_response_plain, print_response_rich
from .cli import main

_EXCLUDED_FROM_ALL = {"cli", "main"}

__all__ = sorted(
    (
        member
        for member in list(vars().keys())
        if (
            not member.startswith("_")
            or member in ["__description__", "__title__", "__version__"]
        )
        and member not in _EXCLUDED_FROM_ALL
    ),
    key=str.casefold,
)
