"""Depth-independent JSON text checking and encoding.

:func:`check` and :func:`dumps` walk nested arrays and objects with an
explicit stack, so nesting depth is bounded by memory instead of the
interpreter's recursion limit. Strings are handled by the scanner and
encoder of the standard :mod:`json` package.
"""
from __future__ import annotations

import re
from json import JSONDecodeError
from json.decoder import scanstring
from json.encoder import encode_basestring
from typing import Any, Callable, Iterator, List, Optional, Set, Tuple

_WS_RX = re.compile(r'[ \t\n\r]*')
_NUMBER_RX = re.compile(r'-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][-+]?[0-9]+)?')
_LITERALS = ('true', 'false', 'null')
_CLOSERS = {'[': ']', '{': '}'}


def _skip(text: str, pos: int) -> int:
    return _WS_RX.match(text, pos).end()


def _string(text: str, pos: int) -> int:
    if text[pos:pos + 1] != '"':
        raise JSONDecodeError('Expecting property name enclosed in double quotes', text, pos)
    _, end = scanstring(text, pos + 1, True)
    return end


def _scalar(text: str, pos: int) -> int:
    for literal in _LITERALS:
        if text.startswith(literal, pos):
            return pos + len(literal)
    match = _NUMBER_RX.match(text, pos)
    if match is None:
        raise JSONDecodeError('Expecting value', text, pos)
    return match.end()


def _member_value(text: str, pos: int) -> int:
    """Consume ``"key" :`` and return the position of the member value."""
    pos = _skip(text, _string(text, pos))
    if text[pos:pos + 1] != ':':
        raise JSONDecodeError("Expecting ':' delimiter", text, pos)
    return _skip(text, pos + 1)


def check(text: str) -> None:
    """Raise :class:`json.JSONDecodeError` unless *text* is one RFC 8259 value.

    Accepts exactly what ``json.loads`` accepts in strict mode, minus the
    ``NaN``/``Infinity``/``-Infinity`` extensions.
    """
    closers: List[str] = []
    pos = _skip(text, 0)
    while True:
        char = text[pos:pos + 1]
        if char in _CLOSERS:
            pos = _skip(text, pos + 1)
            if text[pos:pos + 1] == _CLOSERS[char]:
                pos += 1
            else:
                closers.append(_CLOSERS[char])
                if char == '{':
                    pos = _member_value(text, pos)
                continue
        elif char == '"':
            pos = _string(text, pos)
        else:
            pos = _scalar(text, pos)

        while True:
            pos = _skip(text, pos)
            if not closers:
                if pos != len(text):
                    raise JSONDecodeError('Extra data', text, pos)
                return
            char = text[pos:pos + 1]
            if char == ',':
                pos = _skip(text, pos + 1)
                if closers[-1] == '}':
                    pos = _member_value(text, pos)
                break
            if char == closers[-1]:
                closers.pop()
                pos += 1
                continue
            raise JSONDecodeError(f"Expecting ',' delimiter or '{closers[-1]}'", text, pos)


def _float(value: float) -> str:
    if value != value or value in (float('inf'), float('-inf')):
        raise ValueError(f'Out of range float values are not JSON compliant: {value!r}')
    return float.__repr__(value)


def _key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is True:
        return 'true'
    if key is False:
        return 'false'
    if key is None:
        return 'null'
    if isinstance(key, int):
        return int.__repr__(key)
    if isinstance(key, float):
        return _float(key)
    raise TypeError(f'keys must be str, int, float, bool or None, not {type(key).__name__}')


def _members(obj: dict, sort_keys: bool) -> Iterator[Tuple[str, Any]]:
    items = sorted(obj.items()) if sort_keys else obj.items()
    for key, value in items:
        yield _key(key), value


class _Frame:
    __slots__ = ('items', 'close', 'marker', 'is_object', 'started')

    def __init__(self, items: Iterator[Any], close: str, marker: int, is_object: bool = False) -> None:
        self.items = items
        self.close = close
        self.marker = marker
        self.is_object = is_object
        self.started = False


_DONE = object()


def dumps(
    value: Any,
    *,
    sort_keys: bool = False,
    default: Optional[Callable[[Any], Any]] = None,
) -> str:
    """Encode *value* like ``json.dumps(value, ensure_ascii=False,
    separators=(',', ':'), allow_nan=False)``, without a depth limit."""
    chunks: List[str] = []
    stack: List[_Frame] = []
    markers: Set[int] = set()

    def push(frame: _Frame, opening: str) -> None:
        if frame.marker in markers:
            raise ValueError('Circular reference detected')
        markers.add(frame.marker)
        stack.append(frame)
        chunks.append(opening)

    item = value
    while True:
        if isinstance(item, str):
            chunks.append(encode_basestring(item))
        elif item is None:
            chunks.append('null')
        elif item is True:
            chunks.append('true')
        elif item is False:
            chunks.append('false')
        elif isinstance(item, int):
            chunks.append(int.__repr__(item))
        elif isinstance(item, float):
            chunks.append(_float(item))
        elif isinstance(item, (list, tuple)):
            push(_Frame(iter(item), ']', id(item)), '[')
        elif isinstance(item, dict):
            push(_Frame(_members(item, sort_keys), '}', id(item), is_object=True), '{')
        elif default is not None:
            # A one-item frame so the object stays marked while its
            # replacement is being encoded.
            push(_Frame(iter((default(item),)), '', id(item)), '')
        else:
            raise TypeError(f'Object of type {type(item).__name__} is not JSON serializable')

        while stack:
            frame = stack[-1]
            nxt = next(frame.items, _DONE)
            if nxt is _DONE:
                stack.pop()
                markers.discard(frame.marker)
                chunks.append(frame.close)
                continue
            if frame.started and frame.close:
                chunks.append(',')
            frame.started = True
            if frame.is_object:
                key, item = nxt
                chunks.append(encode_basestring(key) + ':')
            else:
                item = nxt
            break
        else:
            return ''.join(chunks)
