"""JSON parsing with a nesting limit, and compact JSON dumping."""

from __future__ import annotations

import json
from typing import Any, Optional, Union

DEFAULT_MAX_DEPTH = 32


class JSONError(ValueError):
    """Base error for JSON parsing and dumping."""


class JSONParseError(JSONError):
    """Raised when a JSON document is invalid or nested too deeply."""


class JSONDumpError(JSONError):
    """Raised when a value cannot be represented as JSON."""


_TOO_DEEP = "JSON structure recurses too deep"


def _reject_constant(name: str) -> Any:
    raise JSONParseError(f"invalid literal: {name}")


def _depth_violation(text: str, max_depth: int) -> Optional[int]:
    """Position of the first container opened beyond *max_depth*, or None."""
    depth = 0
    in_string = False
    escaped = False
    for pos, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "[{":
            if depth >= max_depth:
                return pos
            depth += 1
        elif ch in "]}":
            depth = max(0, depth - 1)
    return None


def parse(text: Union[str, bytes, bytearray], max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Parse a JSON document.

    Objects become dicts, arrays lists, and numbers int or float. At most
    *max_depth* containers may be open at once; NaN and Infinity are rejected.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise JSONParseError(f"invalid UTF-8 in JSON input: {exc}") from None
    if not isinstance(text, str):
        raise TypeError(f"Expected str or bytes, got {type(text).__name__}")
    if not isinstance(max_depth, int) or isinstance(max_depth, bool):
        raise TypeError(f"Expected int max_depth, got {type(max_depth).__name__}")

    violation = _depth_violation(text, max_depth)
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except JSONParseError:
        if violation is not None:
            raise JSONParseError(_TOO_DEEP) from None
        raise
    except json.JSONDecodeError as exc:
        if violation is not None and violation <= exc.pos:
            raise JSONParseError(_TOO_DEEP) from None
        raise JSONParseError(str(exc)) from None
    except RecursionError:
        raise JSONParseError(_TOO_DEEP) from None
    if violation is not None:
        raise JSONParseError(_TOO_DEEP)
    return value


def _key_to_s(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None:
        return ""
    if key is True:
        return "true"
    if key is False:
        return "false"
    return str(key)


def _dump(obj: Any, out: list[str], seen: list[int]) -> None:
    if obj is None:
        out.append("null")
    elif obj is True:
        out.append("true")
    elif obj is False:
        out.append("false")
    elif isinstance(obj, int):
        out.append(str(obj))
    elif isinstance(obj, float):
        out.append(repr(obj))
    elif isinstance(obj, str):
        out.append(json.dumps(obj, ensure_ascii=False))
    elif isinstance(obj, (list, tuple, dict)):
        if id(obj) in seen:
            raise JSONDumpError("Can't dump recursive data structure to JSON")
        seen.append(id(obj))
        if isinstance(obj, dict):
            out.append("{")
            for index, (key, value) in enumerate(obj.items()):
                if index:
                    out.append(",")
                _dump(_key_to_s(key), out, seen)
                out.append(":")
                _dump(value, out, seen)
            out.append("}")
        else:
            out.append("[")
            for index, item in enumerate(obj):
                if index:
                    out.append(",")
                _dump(item, out, seen)
            out.append("]")
        seen.pop()
    else:
        to_json = getattr(obj, "to_json", None)
        if not callable(to_json):
            raise JSONDumpError(
                f"Can't convert type {type(obj).__name__} to JSON. "
                "You can implement #to_json to fix this."
            )
        out.append(str(to_json()))


def dump(obj: Any) -> str:
    """Serialise *obj* as compact JSON.

    Dict keys are converted to strings. Other objects must provide a
    ``to_json()`` method whose result is inserted verbatim.
    """
    out: list[str] = []
    _dump(obj, out, [])
    return "".join(out)