"""Native Python values → SerializedValue → JavaScript expression."""
from __future__ import annotations

from typing import Any, Optional

from jsembed.core.models import EscapeOptions, SerializedValue
from jsembed.escaping.escaper import escape_json_parse


def serialize(value: Any, *, sort_keys: bool = False) -> SerializedValue:
    """Serialize *value* to compact JSON text exactly once.

    Dataclass instances are converted with :func:`dataclasses.asdict`;
    tuples become arrays. ``NaN``/``Infinity`` and unsupported types
    raise :class:`~jsembed.errors.MalformedValue`.
    """
    return SerializedValue.dump(value, sort_keys=sort_keys)


def to_script(value: Any, options: Optional[EscapeOptions] = None, *, sort_keys: bool = False) -> str:
    """Serialize and escape *value* in one step."""
    return escape_json_parse(serialize(value, sort_keys=sort_keys), options)
