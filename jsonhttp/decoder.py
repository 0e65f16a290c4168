"""JSON decoding with positional diagnostics.

The scanner reads a single JSON value from the start of a byte string and
reports problems in the classic stream-decoder wording, for example::

    invalid character '1' looking for beginning of object key string (offset 2)
    expected json int value but got string (offset 22)

Offsets are byte counts. A syntax error reports the number of bytes read up
to and including the offending byte. A type mismatch reports the index just
past the literal, or just past the opening bracket of an object or array.
Bytes after the first complete value are not examined.

The binder fills a destination from the scanned tree. Supported
destinations are dataclasses (new or existing instances), dicts, and type
hints built from int, float, str, bool, list, dict, Optional and Any.
"""

from __future__ import annotations

import dataclasses
import json
import math
import re
import types
import typing
from typing import Any, Dict, List, Optional, Tuple

from jsonhttp.errors import JSONSyntaxError, JSONTypeError, UnexpectedEOFError

MAX_NESTING_DEPTH = 200

_WHITESPACE = b" \t\r\n"
_DIGITS = b"0123456789"
_HEX = b"0123456789abcdefABCDEF"
_SIMPLE_ESCAPES = b'"\\/bfnrt'
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")
_LITERALS = {
    ord("t"): (b"true", True),
    ord("f"): (b"false", False),
    ord("n"): (b"null", None),
}
_CHAR_ESCAPES = {
    0x07: "\\a", 0x08: "\\b", 0x0C: "\\f", 0x0A: "\\n",
    0x0D: "\\r", 0x09: "\\t", 0x0B: "\\v",
}

_MISSING = object()


def quote_char(c: int) -> str:
    """Format a byte for a syntax error message."""
    if c == 0x27:
        return "'\\''"
    if c == 0x22:
        return "'\"'"
    if c in _CHAR_ESCAPES:
        return f"'{_CHAR_ESCAPES[c]}'"
    ch = chr(c)
    if ch.isprintable():
        return f"'{ch}'"
    if c < 0x80:
        return f"'\\x{c:02x}'"
    return f"'\\u{c:04x}'"


class Node:
    """A scanned JSON value and its byte span."""

    __slots__ = ("kind", "start", "end", "value", "items", "literal")

    def __init__(self, kind: str, start: int, end: int, value: Any = None, items: Any = None):
        self.kind = kind
        self.literal = None
        self.start = start
        self.end = end
        self.value = value
        self.items = items

    def describe(self) -> Tuple[str, int]:
        """Name and offset used when this value does not fit a destination."""
        if self.kind in ("object", "array"):
            return self.kind, self.start + 1
        if self.kind == "literal":
            return ("bool" if isinstance(self.value, bool) else "null"), self.end
        return self.kind, self.end


class Scanner:
    """Recursive descent reader for one JSON value."""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0
        self.depth = 0

    def scan(self) -> Node:
        self._skip_whitespace()
        if self.pos >= len(self.data):
            raise UnexpectedEOFError("EOF")
        return self._value()

    # --- helpers ---

    def _skip_whitespace(self) -> None:
        data = self.data
        while self.pos < len(data) and data[self.pos] in _WHITESPACE:
            self.pos += 1

    def _next(self) -> int:
        """Return the current byte without consuming it."""
        if self.pos >= len(self.data):
            raise UnexpectedEOFError()
        return self.data[self.pos]

    def _error(self, context: str) -> JSONSyntaxError:
        c = self.data[self.pos]
        return JSONSyntaxError(f"invalid character {quote_char(c)} {context}", self.pos + 1)

    def _push(self) -> None:
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise self._error("exceeded max depth")

    # --- values ---

    def _value(self) -> Node:
        c = self._next()
        if c == ord("{"):
            return self._object()
        if c == ord("["):
            return self._array()
        if c == ord('"'):
            return self._string()
        if c == ord("-") or c in _DIGITS:
            return self._number()
        if c in _LITERALS:
            return self._literal(*_LITERALS[c])
        raise self._error("looking for beginning of value")

    def _object(self) -> Node:
        start = self.pos
        self._push()
        self.pos += 1
        items: List[Tuple[str, Node]] = []

        self._skip_whitespace()
        if self._next() == ord("}"):
            self.pos += 1
            self.depth -= 1
            return Node("object", start, self.pos, items=items)

        while True:
            if self._next() != ord('"'):
                raise self._error("looking for beginning of object key string")
            key = self._string().value

            self._skip_whitespace()
            if self._next() != ord(":"):
                raise self._error("after object key")
            self.pos += 1

            self._skip_whitespace()
            items.append((key, self._value()))

            self._skip_whitespace()
            c = self._next()
            if c == ord(","):
                self.pos += 1
                self._skip_whitespace()
                continue
            if c == ord("}"):
                self.pos += 1
                self.depth -= 1
                return Node("object", start, self.pos, items=items)
            raise self._error("after object key:value pair")

    def _array(self) -> Node:
        start = self.pos
        self._push()
        self.pos += 1
        items: List[Node] = []

        self._skip_whitespace()
        if self._next() == ord("]"):
            self.pos += 1
            self.depth -= 1
            return Node("array", start, self.pos, items=items)

        while True:
            items.append(self._value())

            self._skip_whitespace()
            c = self._next()
            if c == ord(","):
                self.pos += 1
                self._skip_whitespace()
                continue
            if c == ord("]"):
                self.pos += 1
                self.depth -= 1
                return Node("array", start, self.pos, items=items)
            raise self._error("after array element")

    def _string(self) -> Node:
        start = self.pos
        self.pos += 1
        while True:
            c = self._next()
            if c == ord('"'):
                self.pos += 1
                break
            if c == ord("\\"):
                self.pos += 1
                c = self._next()
                if c in _SIMPLE_ESCAPES:
                    self.pos += 1
                elif c == ord("u"):
                    self.pos += 1
                    for _ in range(4):
                        if self._next() not in _HEX:
                            raise self._error("in \\u hexadecimal character escape")
                        self.pos += 1
                else:
                    raise self._error("in string escape code")
            elif c < 0x20:
                raise self._error("in string literal")
            else:
                self.pos += 1

        raw = self.data[start:self.pos].decode("utf-8", errors="replace")
        # \ud800-style escapes without a partner decode to lone surrogates
        value = _LONE_SURROGATE.sub("\ufffd", json.loads(raw))
        return Node("string", start, self.pos, value=value)

    def _digits(self) -> None:
        data = self.data
        while self.pos < len(data) and data[self.pos] in _DIGITS:
            self.pos += 1

    def _peek(self) -> Optional[int]:
        if self.pos < len(self.data):
            return self.data[self.pos]
        return None

    def _number(self) -> Node:
        start = self.pos
        if self._next() == ord("-"):
            self.pos += 1
            if self._next() not in _DIGITS:
                raise self._error("in numeric literal")

        if self._next() == ord("0"):
            self.pos += 1
        else:
            self._digits()

        is_float = False
        if self._peek() == ord("."):
            is_float = True
            self.pos += 1
            if self._next() not in _DIGITS:
                raise self._error("after decimal point in numeric literal")
            self._digits()

        if self._peek() in (ord("e"), ord("E")):
            is_float = True
            self.pos += 1
            if self._next() in (ord("+"), ord("-")):
                self.pos += 1
            if self._next() not in _DIGITS:
                raise self._error("in exponent of numeric literal")
            self._digits()

        literal = self.data[start:self.pos].decode("ascii")
        value = float(literal) if is_float else int(literal)
        node = Node("number", start, self.pos, value=value)
        node.literal = literal
        return node

    def _literal(self, word: bytes, value: Any) -> Node:
        start = self.pos
        for expected in word:
            if self._next() != expected:
                raise self._error(f"in literal {word.decode()} (expecting {quote_char(expected)})")
            self.pos += 1
        return Node("literal", start, self.pos, value=value)


# --- binding ---

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_KIND_NAMES = {
    int: "int",
    float: "float64",
    str: "string",
    bool: "bool",
}


def _kind_name(hint: Any) -> str:
    origin = typing.get_origin(hint) or hint
    if origin in _KIND_NAMES:
        return _KIND_NAMES[origin]
    if origin in (list, tuple):
        return "slice"
    if origin is dict:
        return "map"
    if dataclasses.is_dataclass(origin):
        return "struct"
    return getattr(origin, "__name__", str(origin))


def _zero(hint: Any) -> Any:
    origin = typing.get_origin(hint) or hint
    if origin in (int, float, str, bool, list, dict):
        return origin()
    if dataclasses.is_dataclass(origin) and isinstance(origin, type):
        try:
            return origin()
        except TypeError:
            return None
    return None


class Binder:
    """Fill destinations from scanned nodes.

    Decoding continues past a type mismatch. The first mismatch is kept in
    ``error`` and the affected value is left as it was.
    """

    def __init__(self):
        self.error: Optional[JSONTypeError] = None

    def mismatch(self, node: Node, hint: Any, path: str, current: Any, value: Optional[str] = None) -> Any:
        if self.error is None:
            described, offset = node.describe()
            value = value or described
            self.error = JSONTypeError(_kind_name(hint), value, offset, path or None)
        return _zero(hint) if current is _MISSING else current

    def plain(self, node: Node, path: str = "") -> Any:
        """Convert to plain Python values. Numbers beyond float64 range are mismatches."""
        if node.kind == "object":
            return {
                key: self.plain(item, f"{path}.{key}" if path else key)
                for key, item in node.items
            }
        if node.kind == "array":
            return [self.plain(item, f"{path}[{i}]") for i, item in enumerate(node.items)]
        if node.kind == "number" and math.isinf(float(node.literal)):
            self.mismatch(node, float, path, _MISSING, f"number {node.literal}")
            return None
        return node.value

    def bind(self, node: Node, hint: Any, current: Any = _MISSING, path: str = "") -> Any:
        if hint is Any or hint is object:
            return self.plain(node, path)

        origin = typing.get_origin(hint)
        if origin in (typing.Union, types.UnionType):
            args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
            if node.kind == "literal" and node.value is None:
                return None
            if len(args) == 1:
                return self.bind(node, args[0], current, path)
            return self.plain(node, path)

        if node.kind == "literal" and node.value is None:
            return _zero(hint) if current is _MISSING else current

        target = origin or hint
        if target is bool:
            if node.kind == "literal":
                return node.value
            return self.mismatch(node, hint, path, current)
        if target is int:
            return self._bind_int(node, hint, current, path)
        if target is float:
            if node.kind != "number":
                return self.mismatch(node, hint, path, current)
            value = float(node.literal)
            if value in (float("inf"), float("-inf")):
                return self.mismatch(node, hint, path, current, f"number {node.literal}")
            return value
        if target is str:
            if node.kind != "string":
                return self.mismatch(node, hint, path, current)
            return node.value
        if target in (list, tuple):
            return self._bind_list(node, hint, current, path)
        if target is dict:
            return self._bind_map(node, hint, current, path)
        if dataclasses.is_dataclass(target):
            return self._bind_struct(node, target, current, path)

        raise TypeError(f"unsupported decode destination: {hint!r}")

    def _bind_int(self, node: Node, hint: Any, current: Any, path: str) -> Any:
        if node.kind != "number":
            return self.mismatch(node, hint, path, current)
        if isinstance(node.value, float) or not _INT64_MIN <= node.value <= _INT64_MAX:
            return self.mismatch(node, hint, path, current, f"number {node.literal}")
        return node.value

    def _bind_list(self, node: Node, hint: Any, current: Any, path: str) -> Any:
        if node.kind != "array":
            return self.mismatch(node, hint, path, current)
        args = typing.get_args(hint)
        item_hint = args[0] if args else Any
        values = [
            self.bind(item, item_hint, _MISSING, f"{path}[{i}]")
            for i, item in enumerate(node.items)
        ]
        if (typing.get_origin(hint) or hint) is tuple:
            return tuple(values)
        return values

    def _bind_map(self, node: Node, hint: Any, current: Any, path: str) -> Any:
        if node.kind != "object":
            return self.mismatch(node, hint, path, current)
        args = typing.get_args(hint)
        value_hint = args[1] if len(args) == 2 else Any
        result: Dict[str, Any] = current if isinstance(current, dict) else {}
        for key, item in node.items:
            child = f"{path}.{key}" if path else key
            result[key] = self.bind(item, value_hint, result.get(key, _MISSING), child)
        return result

    def _bind_struct(self, node: Node, cls: type, current: Any, path: str) -> Any:
        if node.kind != "object":
            return self.mismatch(node, cls, path, current)

        hints = typing.get_type_hints(cls)
        fields = [f for f in dataclasses.fields(cls)]
        by_name = {f.metadata.get("json", f.name): f for f in fields}
        by_folded = {name.casefold(): f for name, f in by_name.items()}

        in_place = dataclasses.is_dataclass(current) and not isinstance(current, type)
        values: Dict[str, Any] = {}
        for key, item in node.items:
            field = by_name.get(key) or by_folded.get(key.casefold())
            if field is None:
                continue
            if in_place:
                existing = getattr(current, field.name)
            else:
                existing = values.get(field.name, _MISSING)
            child = f"{path}.{field.name}" if path else field.name
            values[field.name] = self.bind(item, hints.get(field.name, Any), existing, child)

        if in_place:
            for name, value in values.items():
                setattr(current, name, value)
            return current

        kwargs = {}
        for f in fields:
            if not f.init:
                continue
            if f.name in values:
                kwargs[f.name] = values[f.name]
            elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                kwargs[f.name] = _zero(hints.get(f.name, Any))
        instance = cls(**kwargs)
        for f in fields:
            if not f.init and f.name in values:
                setattr(instance, f.name, values[f.name])
        return instance


def decode(data: bytes, target: Any = None) -> Any:
    """Decode the first JSON value in data into target.

    Args:
        data: Raw request body.
        target: None for plain Python values, a dataclass class or instance,
            a dict to update, or a type hint.

    Returns:
        The decoded value. Dataclass instances and dicts passed as target
        are filled in place and returned.

    Raises:
        UnexpectedEOFError: The data ends before a complete value.
        JSONSyntaxError: The data is not valid JSON.
        JSONTypeError: A value does not fit the destination.
    """
    node = Scanner(data).scan()
    if target is None:
        hint, current = Any, _MISSING
    elif isinstance(target, dict):
        hint, current = dict, target
    elif dataclasses.is_dataclass(target) and not isinstance(target, type):
        hint, current = type(target), target
    else:
        hint, current = target, _MISSING

    binder = Binder()
    value = binder.bind(node, hint, current)
    if binder.error is not None:
        raise binder.error
    return value
