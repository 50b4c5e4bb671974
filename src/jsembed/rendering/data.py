"""Bindings derived from dataclass instances and plain mappings.

Every dataclass field becomes a safe placeholder named after the field,
unless the field is declared with :func:`raw_field`, in which case its
(str) value is bound to the raw placeholder of the same name. Fields whose
names cannot appear in a placeholder (``_cache``, ``raw_``)
are skipped and never serialized::

    @dataclass
    class Keygen:
        key: str
        length: int
        optional_script: str = raw_field(default='')

    render_data(Keygen('asdf', 4), template)
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from jsembed.core.models import Binding, Bindings, Raw, Safe, Template, is_valid_name
from jsembed.rendering.template_engine import TemplateRenderer

RAW_METADATA_KEY = 'jsembed_raw'


def raw_field(**kwargs: Any) -> Any:
    """``dataclasses.field`` that marks the field as a raw placeholder value."""
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[RAW_METADATA_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def _raw_binding(name: str, value: Any) -> Raw:
    if isinstance(value, Raw):
        return value
    if isinstance(value, str):
        return Raw(value)
    raise TypeError(f'raw field {name!r} must hold str, not {type(value).__name__}')


def _safe_binding(value: Any) -> Binding:
    if isinstance(value, (Safe, Raw)):
        return value
    return Safe.of(value)


def bindings_from(obj: Any) -> Bindings:
    """Build :class:`Bindings` from a dataclass instance or a mapping.

    Mapping values that are already ``Safe``/``Raw`` are kept; anything else
    is serialized into a ``Safe`` binding.
    """
    if isinstance(obj, Bindings):
        return obj
    items: Dict[str, Binding] = {}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        for f in dataclasses.fields(obj):
            if not is_valid_name(f.name):
                continue
            value = getattr(obj, f.name)
            if f.metadata.get(RAW_METADATA_KEY):
                items[f.name] = _raw_binding(f.name, value)
            else:
                items[f.name] = _safe_binding(value)
        return Bindings(items)
    if isinstance(obj, Mapping):
        for name, value in obj.items():
            items[name] = _safe_binding(value)
        return Bindings(items)
    raise TypeError(f'cannot derive bindings from {type(obj).__name__}; expected a dataclass instance or mapping')


def render_data(
    obj: Any,
    template: Union[Template, str],
    *,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """Render *template* with the bindings derived from *obj*."""
    return (renderer or TemplateRenderer()).render(template, bindings_from(obj))
