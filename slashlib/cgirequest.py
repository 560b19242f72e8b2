"""Collecting CGI/FastCGI request information from the process environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Union

from .cgiapi import ApiType

# Environment variables that map directly onto a RequestInfo field.
_DIRECT_FIELDS = {
    "SCRIPT_NAME": "script_name",
    "PATH_TRANSLATED": "path_translated",
    "PATH_INFO": "path_info",
    "SCRIPT_FILENAME": "script_filename",
    "REQUEST_URI": "request_uri",
    "QUERY_STRING": "query_string",
    "REMOTE_ADDR": "remote_addr",
    "REQUEST_METHOD": "request_method",
}

_PLAIN_FIELDS = (
    "script_name",
    "path_translated",
    "path_info",
    "script_filename",
    "content_length",
    "content_type",
    "request_uri",
    "query_string",
    "remote_addr",
    "request_method",
)

_DERIVED_FIELDS = (
    "real_uri",
    "real_path_info",
    "real_canonical_filename",
    "real_canonical_dir",
)


@dataclass
class RequestInfo:
    """Request data gathered from the environment of a CGI or FastCGI request."""

    environment: list[tuple[str, str]] = field(default_factory=list)
    http_headers: list[tuple[str, str]] = field(default_factory=list)

    real_uri: Optional[str] = None
    real_path_info: Optional[str] = None
    real_canonical_filename: Optional[str] = None
    real_canonical_dir: Optional[str] = None

    script_name: Optional[str] = None
    path_translated: Optional[str] = None
    path_info: Optional[str] = None
    script_filename: Optional[str] = None
    content_length: Optional[str] = None
    content_type: Optional[str] = None
    request_uri: Optional[str] = None
    query_string: Optional[str] = None
    remote_addr: Optional[str] = None
    request_method: Optional[str] = None

    def to_dict(self) -> dict:
        """Return every field as a plain dict; environment and headers as dicts."""
        result: dict = {name: getattr(self, name) for name in _PLAIN_FIELDS}
        result.update({name: getattr(self, name) for name in _DERIVED_FIELDS})
        result["environment"] = dict(self.environment)
        result["http_headers"] = dict(self.http_headers)
        return result


def hashbang_length(src: Union[bytes, bytearray, str]) -> int:
    """Length of a leading ``#!/...`` line including its line ending, else 0.

    ``\\r\\n``, ``\\n`` and a lone ``\\r`` all end the line. A hashbang line
    without any line ending counts as 0.
    """
    if isinstance(src, str):
        src = src.encode("utf-8")
    data = bytes(src)
    if not data.startswith(b"#!/"):
        return 0
    for index in range(3, len(data)):
        if data[index] in b"\r\n":
            if data[index : index + 2] == b"\r\n":
                return index + 2
            return index + 1
    return 0


def env_to_http_header_name(name: str) -> str:
    """Turn an environment name (without ``HTTP_``) into a header name.

    The first character and every character after an underscore keep their
    case; underscores become dashes and other capitals are lowered.
    """
    if not name:
        return ""
    out = [name[0]]
    chars = iter(name[1:])
    for ch in chars:
        if ch == "_":
            out.append("-")
            following = next(chars, None)
            if following is not None:
                out.append(following)
        elif "A" <= ch <= "Z":
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def _is_regular_file(path: str) -> bool:
    return os.path.isabs(path) and os.path.isfile(path)


def _environ_pairs(
    environ: Union[Mapping, Iterable[str], None]
) -> Iterable[tuple[str, str]]:
    if environ is None:
        return
    if isinstance(environ, Mapping):
        for name, value in environ.items():
            yield str(name), str(value)
        return
    for entry in environ:
        name, sep, value = entry.partition("=")
        if sep:
            yield name, value


def _strip_last_component(path: str) -> Optional[str]:
    index = path.rfind("/")
    if index < 0:
        index = path.rfind("\\")
    if index < 0:
        return None
    return path[:index]


def _locate_script(
    translated: str, file_exists: Callable[[str], bool]
) -> tuple[str, Optional[str]]:
    """Find the longest existing file prefix of *translated* and the rest."""
    if file_exists(translated):
        return translated, None
    filename = translated
    while True:
        shorter = _strip_last_component(filename)
        if shorter is None:
            return filename, None
        filename = shorter
        if file_exists(filename):
            rest = translated[len(filename) :] if filename else None
            return filename, rest


def _fix_request_info(
    info: RequestInfo,
    api_type: ApiType,
    script_filename: Optional[str],
    file_exists: Callable[[str], bool],
) -> None:
    info.real_uri = info.request_uri
    info.real_path_info = info.path_info
    info.real_canonical_filename = info.script_filename

    if api_type is ApiType.FCGI:
        if info.path_translated is not None:
            filename, path_info = _locate_script(info.path_translated, file_exists)
            if file_exists(filename):
                info.real_canonical_filename = filename
                info.real_path_info = path_info
    elif script_filename and not info.real_canonical_filename:
        info.real_canonical_filename = script_filename

    uri = info.real_uri
    query = info.query_string
    if uri and query:
        cut = len(uri) - len(query) - 1
        if len(uri) > len(query) and cut > 0 and uri[cut] == "?":
            info.real_uri = uri[:cut]

    if info.real_canonical_filename:
        directory = _strip_last_component(info.real_canonical_filename)
        info.real_canonical_dir = (
            directory if directory is not None else info.real_canonical_filename
        )
    elif info.real_canonical_filename == "":
        info.real_canonical_dir = ""


def load_request_info(
    api_type: Union[ApiType, int],
    environ: Union[Mapping, Iterable[str], None],
    script_filename: Optional[str] = None,
    file_exists: Optional[Callable[[str], bool]] = None,
) -> RequestInfo:
    """Build a RequestInfo from ``NAME=value`` strings or a mapping.

    In FastCGI mode the script is located by trimming ``PATH_TRANSLATED``
    until *file_exists* accepts it; the trimmed tail becomes the path info.
    In CGI mode *script_filename* is used when ``SCRIPT_FILENAME`` is unset.
    """
    api_type = ApiType(api_type)
    if file_exists is None:
        file_exists = _is_regular_file

    info = RequestInfo()
    for name, value in _environ_pairs(environ):
        info.environment.append((name, value))
        if name.startswith("HTTP_"):
            info.http_headers.append((env_to_http_header_name(name[5:]), value))
        elif name == "CONTENT_LENGTH":
            info.http_headers.append(("Content-Length", value))
            info.content_length = value
        elif name == "CONTENT_TYPE":
            info.http_headers.append(("Content-Type", value))
            info.content_type = value
        elif name in _DIRECT_FIELDS:
            setattr(info, _DIRECT_FIELDS[name], value)

    _fix_request_info(info, api_type, script_filename, file_exists)
    return info