import json
import socket
import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from gocu.client import (
    RequestError,
    RequestInfo,
    Response,
    delete,
    get,
    patch,
    post,
    prettify_json,
    put,
    send_request,
)


class _EchoHandler(BaseHTTPRequestHandler):
    def _handle(self):
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length).decode("utf-8") if length else ""
        if self.path == "/missing":
            payload = b"not json at all"
            self.send_response(HTTPStatus.NOT_FOUND)
        else:
            payload = json.dumps(
                {
                    "method": self.command,
                    "body": body,
                    "header": self.headers.get("X-Test"),
                },
                separators=(",", ":"),
            ).encode("utf-8")
            self.send_response(HTTPStatus.OK)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    do_GET = do_POST = do_PUT = do_PATCH = do_DELETE = _handle

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _EchoHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()


def _ok_status():
    return f"{HTTPStatus.OK.value} {HTTPStatus.OK.phrase}"


def test_get_returns_status_and_pretty_body(server_url):
    response = get(server_url + "/", {"X-Test": "value"})
    assert response.status == _ok_status()
    assert json.loads(response.data) == {"method": "GET", "body": "", "header": "value"}
    assert "\n  " in response.data


@pytest.mark.parametrize(
    "sender, method",
    [(post, "POST"), (put, "PUT"), (patch, "PATCH"), (delete, "DELETE")],
)
def test_body_methods_send_data(server_url, sender, method):
    response = sender(server_url + "/", {"Content-Type": "application/json"}, '{"a":1}')
    assert response.status == _ok_status()
    assert json.loads(response.data) == {"method": method, "body": '{"a":1}', "header": None}


@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "PATCH", "DELETE"])
def test_send_request_dispatches_on_method(server_url, method):
    info = RequestInfo(method=method, url=server_url + "/", data="{}", headers={"X-Test": "h"})
    response = send_request(info)
    decoded = json.loads(response.data)
    assert decoded["method"] == method
    assert decoded["header"] == "h"


def test_get_sends_no_body(server_url):
    info = RequestInfo(method="GET", url=server_url + "/", data="ignored")
    assert json.loads(send_request(info).data)["body"] == ""


def test_error_status_is_a_response(server_url):
    response = get(server_url + "/missing", {})
    assert response.status == f"{HTTPStatus.NOT_FOUND.value} {HTTPStatus.NOT_FOUND.phrase}"
    assert response.data == ""


def test_invalid_method_raises():
    with pytest.raises(ValueError, match="Invalid HTTP method received: TRACE"):
        send_request(RequestInfo(method="TRACE", url="http://localhost/"))


def test_invalid_url_raises():
    with pytest.raises(ValueError, match="Couldn't create request"):
        send_request(RequestInfo(method="GET", url="not a url"))


def test_unreachable_server_raises_request_error():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    url = f"http://127.0.0.1:{port}/"
    with pytest.raises(RequestError) as excinfo:
        get(url, {})
    assert excinfo.value.method == "GET"
    assert excinfo.value.url == url
    assert str(excinfo.value).startswith(f"Error performing GET request on {url}: ")


def test_response_is_plain_data():
    response = Response(status="status", data="data")
    assert (response.status, response.data) == ("status", "data")


def test_prettify_indents_two_spaces():
    assert prettify_json(b'{"a":1,"b":[1,2]}') == b'{\n  "a": 1,\n  "b": [\n    1,\n    2\n  ]\n}'


def test_prettify_keeps_empty_containers_compact():
    assert prettify_json(b'{ "x" : { } , "y" : [ ] }') == b'{\n  "x": {},\n  "y": []\n}'


def test_prettify_accepts_str():
    assert prettify_json('{"a":1}') == prettify_json(b'{"a":1}')


@pytest.mark.parametrize(
    "text",
    [
        b'{"name":"caf\\u00e9","n":1.50e+2}',
        b'[true,false,null,-0.5,"a\\"b"]',
        b'{"deep":[[{"k":[1,{"z":null}]}]]}',
        b'"just a string"',
        b"42",
    ],
)
def test_prettify_preserves_meaning_and_tokens(text):
    pretty = prettify_json(text)
    assert json.loads(pretty) == json.loads(text)
    assert prettify_json(pretty) == pretty
    assert bytes(b for b in pretty if b not in b" \n") == bytes(
        b for b in text if b not in b" \n"
    )


def test_prettify_keeps_escapes_verbatim():
    assert prettify_json(b'"caf\\u00e9"') == b'"caf\\u00e9"'


def test_prettify_drops_leading_and_keeps_trailing_whitespace():
    assert prettify_json(b"  {}\n") == b"{}\n"


@pytest.mark.parametrize(
    "text",
    [
        b"",
        b"   ",
        b"not json",
        b'{"a":1',
        b'{"a" 1}',
        b"[1,]",
        b"01",
        b"{} {}",
        b'"unterminated',
        b'"bad \\x escape"',
        b"[1 2]",
        b"tru",
    ],
)
def test_prettify_invalid_json_gives_empty(text):
    assert prettify_json(text) == b""