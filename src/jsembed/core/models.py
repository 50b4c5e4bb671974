"""Value types shared by the escaper and the template renderer."""
from __future__ import annotations

import dataclasses
import json
import re
from collections.abc import Mapping
from dataclasses import InitVar, dataclass
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Dict, Iterator, Optional, Union

from jsembed.constants import NAME_PATTERN, PLACEHOLDER_CLOSE, PLACEHOLDER_OPEN, PLACEHOLDER_SEPARATOR, RAW_MARKER, SAFE_MARKER
from jsembed.core import jsontext
from jsembed.errors import InvalidBindingName, JsEmbedError, MalformedValue

_NAME_RX = re.compile(NAME_PATTERN)


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f'Object of type {type(obj).__name__} is not JSON serializable')


def read_text(path: Union[str, Path]) -> str:
    """Read a UTF-8 text file; undecodable bytes raise :class:`JsEmbedError`."""
    try:
        return Path(path).read_text(encoding='utf-8')
    except UnicodeDecodeError as exc:
        raise JsEmbedError(f'{path}: not valid UTF-8 ({exc.reason} at byte {exc.start})') from exc


def is_valid_name(name: object) -> bool:
    """Return True if *name* can appear inside a placeholder."""
    return isinstance(name, str) and bool(_NAME_RX.fullmatch(name))


class PlaceholderKind(Enum):
    """The two placeholder flavours; the value is the marker in the token."""

    SAFE = SAFE_MARKER
    RAW = RAW_MARKER

    @property
    def label(self) -> str:
        return self.name.lower()

    def token(self, name: str) -> str:
        """Return the placeholder text referencing *name*, e.g. ``__RAW_x__``."""
        return f'{PLACEHOLDER_OPEN}{self.value}{PLACEHOLDER_SEPARATOR}{name}{PLACEHOLDER_CLOSE}'


@dataclass(frozen=True)
class SerializedValue:
    """JSON text that has been validated (or produced) exactly once.

    Pass ``validate=False`` only for text that came straight out of
    :func:`json.dumps` with ``allow_nan=False``.
    """

    text: str
    validate: InitVar[bool] = True

    def __post_init__(self, validate: bool) -> None:
        if not isinstance(self.text, str):
            raise MalformedValue(f'JSON text must be str, not {type(self.text).__name__}')
        if not validate:
            return
        try:
            jsontext.check(self.text)
        except ValueError as exc:
            raise MalformedValue(f'not valid JSON text: {exc}') from exc

    @classmethod
    def dump(cls, value: Any, *, sort_keys: bool = False) -> 'SerializedValue':
        """Serialize a native Python value into compact JSON text."""
        try:
            text = json.dumps(
                value,
                ensure_ascii=False,
                separators=(',', ':'),
                allow_nan=False,
                sort_keys=sort_keys,
                default=_json_default,
            )
        except RecursionError:
            text = cls._dump_deep(value, sort_keys)
        except (TypeError, ValueError) as exc:
            raise MalformedValue(f'cannot serialize {type(value).__name__}: {exc}') from exc
        return cls(text, validate=False)

    @classmethod
    def _dump_deep(cls, value: Any, sort_keys: bool) -> str:
        try:
            return jsontext.dumps(value, sort_keys=sort_keys, default=_json_default)
        except (TypeError, ValueError) as exc:
            raise MalformedValue(f'cannot serialize {type(value).__name__}: {exc}') from exc

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class EscapeOptions:
    """Escape rules applied when wrapping JSON text in ``JSON.parse('...')``.

    Quote and backslash escaping are what keep the single-quoted literal
    closed; they cannot be turned off. The optional rules default to on,
    which makes the output safe inside an inline HTML ``<script>`` element:

    - ``escape_html_sensitive``: ``<``, ``>`` and ``&`` become ``\\u`` escapes.
    - ``escape_script_tag_close``: ``</script`` (any case) becomes ``<\\/script``.
    - ``escape_line_separators``: U+2028/U+2029 become ``\\u`` escapes.
    """

    escape_quotes: bool = True
    escape_backslash: bool = True
    escape_html_sensitive: bool = True
    escape_script_tag_close: bool = True
    escape_line_separators: bool = True

    def __post_init__(self) -> None:
        if not self.escape_quotes or not self.escape_backslash:
            raise ValueError('quote and backslash escaping are mandatory and cannot be disabled')

    @classmethod
    def default(cls) -> 'EscapeOptions':
        return cls()

    @classmethod
    def minimal(cls) -> 'EscapeOptions':
        """Only the escapes needed for a valid string literal."""
        return cls(
            escape_html_sensitive=False,
            escape_script_tag_close=False,
            escape_line_separators=False,
        )


@dataclass(frozen=True)
class Template:
    """Template text plus a name used in diagnostics only."""

    text: str
    name: str = '<template>'

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> 'Template':
        return cls(read_text(path), name=str(Path(path)))


@dataclass(frozen=True)
class Safe:
    """Binding for a ``__TEMPLATE_<name>__`` placeholder."""

    value: SerializedValue
    kind: ClassVar[PlaceholderKind] = PlaceholderKind.SAFE

    def __post_init__(self) -> None:
        if not isinstance(self.value, SerializedValue):
            raise TypeError(
                f'Safe() expects a SerializedValue, got {type(self.value).__name__}; '
                'use Safe.of(value) or Safe.from_json(text)'
            )

    @classmethod
    def of(cls, value: Any) -> 'Safe':
        return cls(SerializedValue.dump(value))

    @classmethod
    def from_json(cls, text: str) -> 'Safe':
        return cls(SerializedValue(text))


@dataclass(frozen=True)
class Raw:
    """Binding for a ``__RAW_<name>__`` placeholder; trusted script text."""

    text: str
    kind: ClassVar[PlaceholderKind] = PlaceholderKind.RAW

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f'Raw() expects str, got {type(self.text).__name__}')


Binding = Union[Safe, Raw]


class Bindings(Mapping):
    """Immutable name → :data:`Binding` mapping used for one render call."""

    __slots__ = ('_data',)

    def __init__(self, items: Optional[Mapping] = None, **kwargs: Binding) -> None:
        data: Dict[str, Binding] = dict(items or {})
        data.update(kwargs)
        for name, binding in data.items():
            if not is_valid_name(name):
                raise InvalidBindingName(name)
            if not isinstance(binding, (Safe, Raw)):
                raise TypeError(
                    f'binding {name!r} must be Safe or Raw, not {type(binding).__name__}'
                )
        self._data = data

    def __getitem__(self, name: str) -> Binding:
        return self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def lookup(self, name: str, kind: PlaceholderKind) -> Optional[Binding]:
        """Return the binding for *name* only if it has the requested kind."""
        binding = self._data.get(name)
        if binding is None or binding.kind is not kind:
            return None
        return binding

    def merged(self, other: Mapping) -> 'Bindings':
        """Return a new mapping where *other* wins on name clashes."""
        return Bindings({**self._data, **dict(other)})

    def __repr__(self) -> str:
        inner = ', '.join(f'{k}={v!r}' for k, v in self._data.items())
        return f'Bindings({inner})'
