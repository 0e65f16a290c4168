"""JSON response writing.

Provides respond(), which serializes a payload and writes it through a
BaseHTTPRequestHandler, and one named wrapper per standard HTTP status.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, fields, is_dataclass, replace
from http.server import BaseHTTPRequestHandler
from typing import Any, Callable, Dict, Optional

from jsonhttp.errors import UnsupportedTypeError, UnsupportedValueError
from jsonhttp.status import is_valid_status, status_text

DEFAULT_STATUS_CODE = 200
DEFAULT_CONTENT_TYPE = "application/json; charset=utf-8"

_content_type_lock = threading.Lock()
_content_type = DEFAULT_CONTENT_TYPE


@dataclass
class Message:
    """Default body of a JSON response: a text message and a numeric code."""

    message: str = ""
    code: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


def new_message(message: str) -> Message:
    """Create a Message with the given text and no code."""
    return Message(message=message)


def set_content_type(value: str) -> None:
    """Set the Content-Type header written with every response."""
    global _content_type
    if not value:
        raise ValueError("content type must not be empty")
    with _content_type_lock:
        _content_type = value


def get_content_type() -> str:
    with _content_type_lock:
        return _content_type


def _prepare(value: Any, active: Optional[set] = None) -> Any:
    """Convert a payload to plain JSON types, rejecting unencodable keys.

    Containers still being converted are tracked in active, so a container
    that holds itself is reported instead of recursing without end.
    """
    if isinstance(value, Message):
        return value.to_dict()
    marker = id(value)
    kind = type(value).__name__
    if is_dataclass(value) and not isinstance(value, type):
        value = {f.name: getattr(value, f.name) for f in fields(value)}
    if not isinstance(value, (dict, list, tuple)):
        return value

    active = set() if active is None else active
    if marker in active:
        raise UnsupportedValueError(f"json: unsupported value: encountered a cycle via {kind}")
    active.add(marker)
    try:
        if isinstance(value, dict):
            prepared = {}
            for key, item in value.items():
                # bool is an int subclass but has no JSON key form
                if isinstance(key, bool) or not isinstance(key, (str, int)):
                    raise UnsupportedTypeError(
                        f"json: unsupported mapping key type: {type(key).__name__}"
                    )
                prepared[key] = _prepare(item, active)
            return prepared
        return [_prepare(item, active) for item in value]
    finally:
        active.discard(marker)


def _reject(value: Any) -> Any:
    raise UnsupportedTypeError(f"json: unsupported type: {type(value).__name__}")


def encode(payload: Any) -> bytes:
    """Serialize a payload to the bytes of a response body.

    Raises:
        UnsupportedTypeError: The payload holds a type JSON cannot represent.
        UnsupportedValueError: The payload holds NaN, an infinite float, a
            string that is not valid Unicode, or a container that holds itself.
    """
    prepared = _prepare(payload)
    try:
        text = json.dumps(
            prepared,
            default=_reject,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        )
        # lone surrogates fail here, not in dumps
        return (text + "\n").encode("utf-8")
    except ValueError as e:
        raise UnsupportedValueError(f"json: unsupported value: {e}") from e


def _resolve(status_code: int, payload: Any) -> tuple:
    """Work out the effective status and the body for respond()."""
    status = int(status_code or 0)
    if status and not is_valid_status(status):
        raise ValueError(f"invalid HTTP status code: {status}")

    if not status and isinstance(payload, Message) and is_valid_status(payload.code):
        status = payload.code

    if payload is None:
        body: Any = Message(status_text(status), status) if status else Message()
    elif isinstance(payload, Message):
        body = payload
        if status and not payload.code:
            body = replace(payload, code=status, message=payload.message or status_text(status))
    elif isinstance(payload, str):
        body = Message(payload, status or DEFAULT_STATUS_CODE)
    elif isinstance(payload, Exception):
        body = Message(str(payload), status or DEFAULT_STATUS_CODE)
    else:
        body = payload

    return status or DEFAULT_STATUS_CODE, body


def respond(
    handler: BaseHTTPRequestHandler,
    status_code: int = 0,
    payload: Any = None,
) -> None:
    """Write payload as a JSON response.

    A status_code of 0 takes the status from a Message payload whose code is
    a valid HTTP status, and falls back to 200 otherwise. A missing payload
    becomes a Message carrying the status and its reason phrase; strings and
    exceptions become a Message carrying their text.

    The body is serialized before anything is written, so an unencodable
    payload raises without leaving a partial response behind.

    Args:
        handler: The HTTP request handler to write to.
        status_code: HTTP status code, or 0 to derive it.
        payload: The value to serialize.

    Raises:
        UnsupportedTypeError: The payload cannot be represented as JSON.
        UnsupportedValueError: The payload holds NaN, an infinite float, a
            lone surrogate, or a container that holds itself.
        ValueError: status_code is not a valid HTTP status.
    """
    status, body = _resolve(status_code, payload)
    data = encode(body)
    handler.send_response(status)
    handler.send_header("Content-Type", get_content_type())
    handler.send_header("X-Content-Type-Options", "nosniff")
    handler.send_header("Content-Length", str(len(data)))
    handler.end_headers()
    handler.wfile.write(data)


StatusResponder = Callable[..., None]

_RESPONDERS: Dict[int, StatusResponder] = {}


def _status_responder(code: int, name: str) -> StatusResponder:
    def responder(handler: BaseHTTPRequestHandler, payload: Any = None) -> None:
        respond(handler, code, payload)

    responder.__name__ = responder.__qualname__ = name
    responder.__doc__ = f"Respond with {code} {status_text(code)}."
    _RESPONDERS[code] = responder
    return responder


def responder_for(code: int) -> Optional[StatusResponder]:
    """Return the named wrapper for a status code, if there is one."""
    return _RESPONDERS.get(int(code))


continue_ = _status_responder(100, "continue_")
switching_protocols = _status_responder(101, "switching_protocols")

ok = _status_responder(200, "ok")
created = _status_responder(201, "created")
accepted = _status_responder(202, "accepted")
non_authoritative_info = _status_responder(203, "non_authoritative_info")
no_content = _status_responder(204, "no_content")
reset_content = _status_responder(205, "reset_content")
partial_content = _status_responder(206, "partial_content")

multiple_choices = _status_responder(300, "multiple_choices")
moved_permanently = _status_responder(301, "moved_permanently")
found = _status_responder(302, "found")
see_other = _status_responder(303, "see_other")
not_modified = _status_responder(304, "not_modified")
use_proxy = _status_responder(305, "use_proxy")
temporary_redirect = _status_responder(307, "temporary_redirect")
permanent_redirect = _status_responder(308, "permanent_redirect")

bad_request = _status_responder(400, "bad_request")
unauthorized = _status_responder(401, "unauthorized")
payment_required = _status_responder(402, "payment_required")
forbidden = _status_responder(403, "forbidden")
not_found = _status_responder(404, "not_found")
method_not_allowed = _status_responder(405, "method_not_allowed")
not_acceptable = _status_responder(406, "not_acceptable")
proxy_auth_required = _status_responder(407, "proxy_auth_required")
request_timeout = _status_responder(408, "request_timeout")
conflict = _status_responder(409, "conflict")
gone = _status_responder(410, "gone")
length_required = _status_responder(411, "length_required")
precondition_failed = _status_responder(412, "precondition_failed")
request_entity_too_large = _status_responder(413, "request_entity_too_large")
request_uri_too_long = _status_responder(414, "request_uri_too_long")
unsupported_media_type = _status_responder(415, "unsupported_media_type")
requested_range_not_satisfiable = _status_responder(416, "requested_range_not_satisfiable")
expectation_failed = _status_responder(417, "expectation_failed")
teapot = _status_responder(418, "teapot")
unprocessable_entity = _status_responder(422, "unprocessable_entity")
upgrade_required = _status_responder(426, "upgrade_required")
precondition_required = _status_responder(428, "precondition_required")
too_many_requests = _status_responder(429, "too_many_requests")
request_header_fields_too_large = _status_responder(431, "request_header_fields_too_large")
unavailable_for_legal_reasons = _status_responder(451, "unavailable_for_legal_reasons")

internal_server_error = _status_responder(500, "internal_server_error")
not_implemented = _status_responder(501, "not_implemented")
bad_gateway = _status_responder(502, "bad_gateway")
service_unavailable = _status_responder(503, "service_unavailable")
gateway_timeout = _status_responder(504, "gateway_timeout")
http_version_not_supported = _status_responder(505, "http_version_not_supported")

STATUS_WRAPPERS: Dict[str, int] = {
    fn.__name__: code for code, fn in _RESPONDERS.items()
}
