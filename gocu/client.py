"""Minimal HTTP client sending requests and returning pretty-printed JSON bodies."""

from __future__ import annotations

import http.client
import urllib.error
import urllib.request
from dataclasses import dataclass, field

_WHITESPACE = b" \t\r\n"
_INDENT = b"  "
_DIGITS = b"0123456789"
_HEX = b"0123456789abcdefABCDEF"
_ESCAPES = b'"\\/bfnrtu'


class RequestError(Exception):
    """Raised when a request could not be performed."""

    def __init__(self, method: str, url: str, cause: BaseException) -> None:
        super().__init__(method, url, cause)
        self.method = method
        self.url = url
        self.cause = cause

    def __str__(self) -> str:
        return f"Error performing {self.method} request on {self.url}: {self.cause}"


@dataclass
class RequestInfo:
    """What to send: method, URL, body and headers."""

    method: str
    url: str
    data: str = ""
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class Response:
    """Status line and pretty-printed body of a response."""

    status: str
    data: str


def send_request(info: RequestInfo) -> Response:
    """Send a request with one of the supported methods."""
    senders = {
        "GET": lambda: get(info.url, info.headers),
        "POST": lambda: post(info.url, info.headers, info.data),
        "PUT": lambda: put(info.url, info.headers, info.data),
        "PATCH": lambda: patch(info.url, info.headers, info.data),
        "DELETE": lambda: delete(info.url, info.headers, info.data),
    }
    sender = senders.get(info.method)
    if sender is None:
        raise ValueError(f"Invalid HTTP method received: {info.method}")
    return sender()


def get(url: str, headers: dict[str, str] | None) -> Response:
    return _send(RequestInfo("GET", url, "", dict(headers or {})))


def post(url: str, headers: dict[str, str] | None, data: str) -> Response:
    return _send(RequestInfo("POST", url, data, dict(headers or {})))


def put(url: str, headers: dict[str, str] | None, data: str) -> Response:
    return _send(RequestInfo("PUT", url, data, dict(headers or {})))


def patch(url: str, headers: dict[str, str] | None, data: str) -> Response:
    return _send(RequestInfo("PATCH", url, data, dict(headers or {})))


def delete(url: str, headers: dict[str, str] | None, data: str) -> Response:
    return _send(RequestInfo("DELETE", url, data, dict(headers or {})))


def _send(info: RequestInfo) -> Response:
    body = info.data.encode("utf-8") if info.data else None
    try:
        request = urllib.request.Request(info.url, data=body, method=info.method)
    except ValueError as exc:
        raise ValueError(f"Couldn't create request: {exc}") from exc
    for name, value in info.headers.items():
        request.add_header(name, value)
    try:
        with urllib.request.urlopen(request) as response:
            return _parse_response(response.status, response.reason, response.read())
    except urllib.error.HTTPError as err:
        with err:
            return _parse_response(err.code, err.reason, err.read())
    except (urllib.error.URLError, http.client.HTTPException, OSError) as exc:
        raise RequestError(info.method, info.url, exc) from exc


def _parse_response(code: int, reason: str, body: bytes) -> Response:
    status = f"{code} {reason}" if reason else str(code)
    return Response(status=status, data=prettify_json(body).decode("utf-8", errors="replace"))


class _InvalidJson(Exception):
    pass


def prettify_json(data: bytes | str) -> bytes:
    """Indent JSON by two spaces, keeping tokens verbatim; invalid JSON gives empty bytes."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    try:
        return _indent(data)
    except _InvalidJson:
        return b""


def _skip_whitespace(data: bytes, pos: int) -> int:
    while pos < len(data) and data[pos] in _WHITESPACE:
        pos += 1
    return pos


def _scan_string(data: bytes, pos: int) -> int:
    """Return the index just past the string literal starting at pos."""
    n = len(data)
    pos += 1
    while pos < n:
        c = data[pos]
        if c == 0x22:
            return pos + 1
        if c == 0x5C:
            if pos + 1 >= n or data[pos + 1] not in _ESCAPES:
                raise _InvalidJson
            if data[pos + 1] == 0x75:
                digits = data[pos + 2 : pos + 6]
                if len(digits) != 4 or any(d not in _HEX for d in digits):
                    raise _InvalidJson
                pos += 6
            else:
                pos += 2
            continue
        if c < 0x20:
            raise _InvalidJson
        pos += 1
    raise _InvalidJson


def _scan_digits(data: bytes, pos: int) -> int:
    start = pos
    while pos < len(data) and data[pos] in _DIGITS:
        pos += 1
    if pos == start:
        raise _InvalidJson
    return pos


def _scan_number(data: bytes, pos: int) -> int:
    n = len(data)
    if data[pos] == 0x2D:
        pos += 1
    if pos >= n or data[pos] not in _DIGITS:
        raise _InvalidJson
    if data[pos] == 0x30:
        pos += 1
    else:
        pos = _scan_digits(data, pos)
    if pos < n and data[pos] == 0x2E:
        pos = _scan_digits(data, pos + 1)
    if pos < n and data[pos] in b"eE":
        pos += 1
        if pos < n and data[pos] in b"+-":
            pos += 1
        pos = _scan_digits(data, pos)
    return pos


def _scan_scalar(data: bytes, pos: int) -> int:
    c = data[pos]
    if c == 0x22:
        return _scan_string(data, pos)
    if c == 0x2D or c in _DIGITS:
        return _scan_number(data, pos)
    for literal in (b"true", b"false", b"null"):
        if data.startswith(literal, pos):
            return pos + len(literal)
    raise _InvalidJson


def _newline(out: bytearray, depth: int) -> None:
    out += b"\n"
    out += _INDENT * depth


def _indent(data: bytes) -> bytes:
    closers = {ord("{"): ord("}"), ord("["): ord("]")}
    n = len(data)
    out = bytearray()
    stack: list[int] = []
    pos = _skip_whitespace(data, 0)
    expecting = "value"
    while True:
        if expecting == "value":
            if pos >= n:
                raise _InvalidJson
            c = data[pos]
            if c in closers:
                pos = _skip_whitespace(data, pos + 1)
                if pos < n and data[pos] == closers[c]:
                    out.append(c)
                    out.append(closers[c])
                    pos += 1
                    expecting = "after"
                else:
                    out.append(c)
                    stack.append(c)
                    _newline(out, len(stack))
                    expecting = "key" if c == ord("{") else "value"
                continue
            end = _scan_scalar(data, pos)
            out += data[pos:end]
            pos = end
            expecting = "after"
        elif expecting == "key":
            if pos >= n or data[pos] != 0x22:
                raise _InvalidJson
            end = _scan_string(data, pos)
            out += data[pos:end]
            pos = _skip_whitespace(data, end)
            if pos >= n or data[pos] != 0x3A:
                raise _InvalidJson
            out += b": "
            pos = _skip_whitespace(data, pos + 1)
            expecting = "value"
        else:
            if not stack:
                rest = data[pos:]
                if rest.strip(_WHITESPACE):
                    raise _InvalidJson
                out += rest
                return bytes(out)
            pos = _skip_whitespace(data, pos)
            if pos >= n:
                raise _InvalidJson
            c = data[pos]
            top = stack[-1]
            if c == 0x2C:
                out.append(c)
                _newline(out, len(stack))
                pos = _skip_whitespace(data, pos + 1)
                expecting = "key" if top == ord("{") else "value"
            elif c == closers[top]:
                stack.pop()
                _newline(out, len(stack))
                out.append(c)
                pos += 1
            else:
                raise _InvalidJson