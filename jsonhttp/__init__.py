"""jsonhttp: JSON responses and request bodies for http.server handlers.

Example::

    from jsonhttp import Message, RequestBodyError, created, unmarshal_request_body

    class Handler(BaseHTTPRequestHandler):
        def do_POST(self):
            try:
                message = unmarshal_request_body(self, Message)
            except RequestBodyError:
                return
            created(self, message)
"""

from jsonhttp.decoder import decode
from jsonhttp.errors import (
    EmptyRequestBodyError,
    JSONHTTPError,
    JSONSyntaxError,
    JSONTypeError,
    RequestBodyError,
    UnexpectedEOFError,
    UnsupportedTypeError,
    UnsupportedValueError,
)
from jsonhttp.response import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_STATUS_CODE,
    STATUS_WRAPPERS,
    Message,
    encode,
    get_content_type,
    new_message,
    respond,
    responder_for,
    set_content_type,
    continue_,
    switching_protocols,
    ok,
    created,
    accepted,
    non_authoritative_info,
    no_content,
    reset_content,
    partial_content,
    multiple_choices,
    moved_permanently,
    found,
    see_other,
    not_modified,
    use_proxy,
    temporary_redirect,
    permanent_redirect,
    bad_request,
    unauthorized,
    payment_required,
    forbidden,
    not_found,
    method_not_allowed,
    not_acceptable,
    proxy_auth_required,
    request_timeout,
    conflict,
    gone,
    length_required,
    precondition_failed,
    request_entity_too_large,
    request_uri_too_long,
    unsupported_media_type,
    requested_range_not_satisfiable,
    expectation_failed,
    teapot,
    unprocessable_entity,
    upgrade_required,
    precondition_required,
    too_many_requests,
    request_header_fields_too_large,
    unavailable_for_legal_reasons,
    internal_server_error,
    not_implemented,
    bad_gateway,
    service_unavailable,
    gateway_timeout,
    http_version_not_supported,
)
from jsonhttp.status import STATUS_TEXT, is_valid_status, status_text
from jsonhttp.unmarshal import unmarshal_request_body

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "DEFAULT_STATUS_CODE",
    "STATUS_TEXT",
    "STATUS_WRAPPERS",
    "EmptyRequestBodyError",
    "JSONHTTPError",
    "JSONSyntaxError",
    "JSONTypeError",
    "Message",
    "RequestBodyError",
    "UnexpectedEOFError",
    "UnsupportedTypeError",
    "UnsupportedValueError",
    "decode",
    "encode",
    "get_content_type",
    "is_valid_status",
    "new_message",
    "respond",
    "responder_for",
    "set_content_type",
    "status_text",
    "unmarshal_request_body",
    "continue_",
    "switching_protocols",
    "ok",
    "created",
    "accepted",
    "non_authoritative_info",
    "no_content",
    "reset_content",
    "partial_content",
    "multiple_choices",
    "moved_permanently",
    "found",
    "see_other",
    "not_modified",
    "use_proxy",
    "temporary_redirect",
    "permanent_redirect",
    "bad_request",
    "unauthorized",
    "payment_required",
    "forbidden",
    "not_found",
    "method_not_allowed",
    "not_acceptable",
    "proxy_auth_required",
    "request_timeout",
    "conflict",
    "gone",
    "length_required",
    "precondition_failed",
    "request_entity_too_large",
    "request_uri_too_long",
    "unsupported_media_type",
    "requested_range_not_satisfiable",
    "expectation_failed",
    "teapot",
    "unprocessable_entity",
    "upgrade_required",
    "precondition_required",
    "too_many_requests",
    "request_header_fields_too_large",
    "unavailable_for_legal_reasons",
    "internal_server_error",
    "not_implemented",
    "bad_gateway",
    "service_unavailable",
    "gateway_timeout",
    "http_version_not_supported",
]

__version__ = "1.0.0"
