"""Exception types raised by jsonhttp.

Serialization failures are programmer errors and propagate to the caller.
Request body failures are raised after a 400 response has been written.
"""

from http import HTTPStatus
from typing import Optional


class JSONHTTPError(Exception):
    """Base class for all jsonhttp errors."""


class UnsupportedTypeError(JSONHTTPError, TypeError):
    """A payload contains a value of a type JSON cannot represent."""


class UnsupportedValueError(JSONHTTPError, ValueError):
    """A payload contains a value JSON cannot represent (NaN, Infinity)."""


class RequestBodyError(JSONHTTPError):
    """The request body could not be decoded.

    Attributes:
        message: The diagnostic sent to the client.
        status: The HTTP status of the response already written.
    """

    status = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyRequestBodyError(RequestBodyError):
    """The request carried no body."""

    def __init__(self, message: str = "empty request body"):
        super().__init__(message)


class UnexpectedEOFError(RequestBodyError):
    """The body ended before a complete JSON value was read."""

    def __init__(self, message: str = "unexpected EOF"):
        super().__init__(message)


class JSONSyntaxError(RequestBodyError):
    """The body is not valid JSON.

    Attributes:
        reason: Scanner diagnostic without the offset suffix.
        offset: Number of bytes read when the error was detected.
    """

    def __init__(self, reason: str, offset: int):
        super().__init__(f"{reason} (offset {offset})")
        self.reason = reason
        self.offset = offset


class JSONTypeError(RequestBodyError):
    """A JSON value does not fit the destination type.

    Attributes:
        kind: Kind of the destination (int, string, struct, ...).
        value: Description of the JSON value (string, number, object, ...).
        offset: Byte offset at which the value was decoded.
        field: Dotted path of the destination field, if any.
    """

    def __init__(self, kind: str, value: str, offset: int, field: Optional[str] = None):
        super().__init__(f"expected json {kind} value but got {value} (offset {offset})")
        self.kind = kind
        self.value = value
        self.offset = offset
        self.field = field
