"""Command-line options, header output and request bodies for the CGI front end."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from .cgirequest import RequestInfo
from .http_status import format_status_line

DEFAULT_CONTENT_TYPE = "text/html; charset=utf-8"
HEADER_SEPARATOR = "\r\n"
NAME_VALUE_SEPARATOR = ": "
MAX_STATUS_LINE_LENGTH = 64

_LLONG_MAX = (1 << 63) - 1
_LLONG_MIN = -(1 << 63)
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


class OptionsError(ValueError):
    """Raised when the command line cannot be understood."""


@dataclass
class CgiOptions:
    """Settings taken from the command line and the environment."""

    incpaths: list[str] = field(default_factory=list)
    fcgi_bind: Optional[str] = None
    fcgi_backlog: int = 5
    fcgi_num_childs: int = 0
    fcgi_num_requests: int = 0
    script_filename: Optional[str] = None
    script_options: list[str] = field(default_factory=list)
    show_help: bool = False


def _leading_int(text: str) -> int:
    """Integer at the start of *text*, or 0 if there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _take_value(args: list[str], index: int, message: str) -> str:
    if index + 1 >= len(args):
        raise OptionsError(message)
    return args[index + 1]


def _positive(value: str, message: str) -> int:
    number = _leading_int(value)
    if number <= 0:
        raise OptionsError(message)
    return number


def parse_arguments(
    argv: Optional[list[str]] = None, environ: Optional[Mapping[str, str]] = None
) -> CgiOptions:
    """Parse ``argv`` (program name first) into CgiOptions.

    ``SL_FCGI_CHILDREN`` and ``SL_FCGI_MAX_REQUESTS`` in *environ* set the
    child and request counts when positive. Parsing stops at ``-h`` (with
    ``show_help`` set) or at the first argument that is not an option; that
    argument names the script and the rest are passed to it.
    """
    if argv is None:
        argv = sys.argv
    if environ is None:
        environ = os.environ

    options = CgiOptions()
    children = environ.get("SL_FCGI_CHILDREN")
    if children is not None and _leading_int(children) > 0:
        options.fcgi_num_childs = _leading_int(children)
    max_requests = environ.get("SL_FCGI_MAX_REQUESTS")
    if max_requests is not None and _leading_int(max_requests) > 0:
        options.fcgi_num_requests = _leading_int(max_requests)

    args = list(argv)
    index = 1
    while index < len(args):
        arg = args[index]
        if arg == "-I":
            options.incpaths.append(
                _take_value(args, index, "Expected <path> after -I")
            )
            index += 2
        elif arg == "-b":
            options.fcgi_bind = _take_value(
                args, index, "Expected socket or port number after -b"
            )
            index += 2
        elif arg == "-B":
            message = "Expected numeric backlog count after -B"
            options.fcgi_backlog = _positive(_take_value(args, index, message), message)
            index += 2
        elif arg == "-c":
            message = "Expected numeric child count after -c"
            options.fcgi_num_childs = _positive(
                _take_value(args, index, message), message
            )
            index += 2
        elif arg == "-h":
            options.show_help = True
            return options
        else:
            break

    if index < len(args):
        options.script_filename = args[index]
        options.script_options = args[index + 1 :]
    return options


def help_text(program_name: str) -> str:
    """Usage text for the CGI front end."""
    return (
        f"Usage: {program_name} [options]\n"
        "\n"
        "Options:\n"
        "   -I <path>       Adds <path> to the list of paths"
        " searched when requiring files\n"
        "   -b <path,:port> FCGI: Listen on the given path\n"
        "   -B <backlog>    FCGI: Size of listen queue\n"
        "   -c <number>     FCGI: Number of children to fork\n"
        "   -h              Prints this help\n"
    )


def format_header(name: str, value: str) -> str:
    """One CGI header line, terminated by CRLF."""
    return f"{name}{NAME_VALUE_SEPARATOR}{value}{HEADER_SEPARATOR}"


def write_headers(
    write: Callable[[str], object],
    status: int,
    headers: Iterable[tuple[str, str]],
) -> None:
    """Write the status, the headers and a blank line through *write*.

    A ``Content-Type`` header is added when none of *headers* has one.
    """
    status_line = format_status_line(status)
    if 0 < len(status_line) <= MAX_STATUS_LINE_LENGTH:
        write(format_header("Status", status_line))

    content_type_sent = False
    for name, value in headers:
        if name.lower() == "content-type":
            content_type_sent = True
        write(format_header(name, value))

    if not content_type_sent:
        write(format_header("Content-Type", DEFAULT_CONTENT_TYPE))
    write(HEADER_SEPARATOR)


def read_post_data(info: RequestInfo, read_in: Callable[[int], bytes]) -> bytes:
    """Read the request body announced by ``CONTENT_LENGTH``.

    A missing or non-numeric length means no body. A negative length or one
    outside the 64-bit range raises ValueError("Invalid Request").
    """
    content_length = 0
    if info.content_length is not None:
        length = _leading_int(info.content_length)
        if length < _LLONG_MIN or length > _LLONG_MAX or length < 0:
            raise ValueError("Invalid Request")
        content_length = length

    if content_length > 0:
        return bytes(read_in(content_length))
    return b""