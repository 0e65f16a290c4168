"""Integration tests for the demo server.

These tests start a real server and talk to it over HTTP.
"""

import json
import threading
import urllib.error
import urllib.request
from urllib.parse import urljoin

import pytest

from jsonhttp.core.server import create_test_server


@pytest.fixture
def test_server(tmp_path):
    """Create and start a test server instance."""
    server, settings, base_url = create_test_server(port=0, config_dir=tmp_path)

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    yield base_url, settings

    server.shutdown()
    thread.join(timeout=5)
    server.server_close()


def _post(base_url, path, body=None):
    data = body.encode("utf-8") if isinstance(body, str) else body
    return urllib.request.Request(
        urljoin(base_url, path),
        data=data,
        headers={"Content-Type": "application/json"},
        method="POST",
    )


def _error(request):
    """Open a request expected to fail; return (status, decoded body)."""
    with pytest.raises(urllib.error.HTTPError) as exc_info:
        urllib.request.urlopen(request)
    err = exc_info.value
    return err.code, json.loads(err.read().decode("utf-8"))


def test_health(test_server):
    base_url, settings = test_server

    with urllib.request.urlopen(urljoin(base_url, "/api/health")) as response:
        assert response.status == 200
        assert response.headers["Content-Type"] == "application/json; charset=utf-8"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        data = json.load(response)

    assert data == {"status": "ok"}


def test_echo(test_server):
    base_url, settings = test_server

    with urllib.request.urlopen(_post(base_url, "/api/echo", '{"message":"hello"}')) as response:
        assert response.status == 200
        data = json.load(response)

    assert data == {"code": 0, "message": "hello"}


def test_echo_status_from_code(test_server):
    """A valid status in the echoed code becomes the response status."""
    base_url, settings = test_server

    status, data = _error(_post(base_url, "/api/echo", '{"message":"teapot","code":418}'))

    assert status == 418
    assert data == {"code": 418, "message": "teapot"}


def test_create_message(test_server):
    base_url, settings = test_server

    with urllib.request.urlopen(_post(base_url, "/api/messages", '{"message":"stored"}')) as response:
        assert response.status == 201
        data = json.load(response)

    assert data == {"code": 201, "message": "stored"}


def test_empty_body_rejected(test_server):
    base_url, settings = test_server

    status, data = _error(_post(base_url, "/api/echo"))

    assert status == 400
    assert data == {"code": 400, "message": "empty request body"}


def test_syntax_error_rejected(test_server):
    base_url, settings = test_server

    status, data = _error(_post(base_url, "/api/echo", "{1}"))

    assert status == 400
    assert data["message"] == "invalid character '1' looking for beginning of object key string (offset 2)"


def test_type_error_rejected(test_server):
    base_url, settings = test_server

    status, data = _error(_post(base_url, "/api/messages", '{"code":"invalid code"}'))

    assert status == 400
    assert data == {"code": 400, "message": "expected json int value but got string (offset 22)"}


@pytest.mark.parametrize("code,text", [
    (403, "Forbidden"),
    (404, "Not Found"),
    (503, "Service Unavailable"),
])
def test_status_route_errors(test_server, code, text):
    base_url, settings = test_server

    status, data = _error(urllib.request.Request(urljoin(base_url, f"/api/status/{code}")))

    assert status == code
    assert data == {"code": code, "message": text}


def test_status_route_success(test_server):
    base_url, settings = test_server

    with urllib.request.urlopen(urljoin(base_url, "/api/status/202")) as response:
        assert response.status == 202
        assert json.load(response) == {"code": 202, "message": "Accepted"}


@pytest.mark.parametrize("code", ["100", "204", "999", "abc"])
def test_status_route_unknown(test_server, code):
    base_url, settings = test_server

    status, data = _error(urllib.request.Request(urljoin(base_url, f"/api/status/{code}")))

    assert status == 404
    assert data == {"code": 404, "message": f"no responder for status {code}"}


def test_unknown_path(test_server):
    base_url, settings = test_server

    status, data = _error(urllib.request.Request(urljoin(base_url, "/nowhere")))

    assert status == 404
    assert data == {"code": 404, "message": "Not Found"}


def test_method_not_allowed(test_server):
    base_url, settings = test_server

    request = urllib.request.Request(urljoin(base_url, "/api/echo"), method="DELETE")
    status, data = _error(request)

    assert status == 405
    assert data == {"code": 405, "message": "Method Not Allowed"}


def test_content_type_from_settings(tmp_path):
    """The Content-Type header follows the configured value."""
    (tmp_path / "jsonhttp-settings.json").write_text(
        json.dumps({"contentType": "application/vnd.demo+json"}), encoding="utf-8"
    )
    server, settings, base_url = create_test_server(port=0, config_dir=tmp_path)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        with urllib.request.urlopen(urljoin(base_url, "/api/health")) as response:
            assert response.headers["Content-Type"] == "application/vnd.demo+json"
    finally:
        server.shutdown()
        thread.join(timeout=5)
        server.server_close()


def test_echo_unpaired_surrogate(test_server):
    base_url, settings = test_server

    with urllib.request.urlopen(_post(base_url, "/api/echo", '{"message":"\\udc00x"}')) as response:
        assert response.status == 200
        data = json.load(response)

    assert data == {"code": 0, "message": "\ufffdx"}
