"""
jsembed – embed application data into JavaScript safely.

Two pieces:

  • escaping: JSON text → ``JSON.parse('...')`` expressions that evaluate to
    the same value and cannot break out of the surrounding script.
  • rendering: script templates with ``__TEMPLATE_name__`` (escaped) and
    ``__RAW_name__`` (verbatim) placeholders.

Quick start::

    >>> from jsembed import Raw, Safe, render
    >>> render('const k = __TEMPLATE_key__', {'key': Safe.of('asdf')})
    'const k = JSON.parse(\\'"asdf"\\')'
"""
from __future__ import annotations

from jsembed.constants import NAME_PATTERN
from jsembed.core.models import (
    Binding,
    Bindings,
    EscapeOptions,
    PlaceholderKind,
    Raw,
    Safe,
    SerializedValue,
    Template,
)
from jsembed.errors import (
    InvalidBindingName,
    JsEmbedError,
    MalformedValue,
    MissingBinding,
    TemplateNotRegistered,
    UnsafeScript,
    UnusedBinding,
)
from jsembed.escaping import JsonParseEscaper, escape_json_parse, serialize, to_script
from jsembed.html import script_tag
from jsembed.rendering import (
    PlaceholderScanner,
    RendererConfig,
    TemplateRenderer,
    UnusedBindingPolicy,
    bindings_from,
    default_template,
    get_template,
    raw_field,
    register_template,
    render,
    render_data,
    render_default,
    unregister_template,
)

__version__ = '0.3.0'

__all__ = [
    'NAME_PATTERN',
    # models
    'Binding',
    'Bindings',
    'EscapeOptions',
    'PlaceholderKind',
    'Raw',
    'Safe',
    'SerializedValue',
    'Template',
    # errors
    'InvalidBindingName',
    'JsEmbedError',
    'MalformedValue',
    'MissingBinding',
    'TemplateNotRegistered',
    'UnsafeScript',
    'UnusedBinding',
    # escaping
    'JsonParseEscaper',
    'escape_json_parse',
    'serialize',
    'to_script',
    # rendering
    'PlaceholderScanner',
    'RendererConfig',
    'TemplateRenderer',
    'UnusedBindingPolicy',
    'bindings_from',
    'default_template',
    'get_template',
    'raw_field',
    'register_template',
    'render',
    'render_data',
    'render_default',
    'unregister_template',
    # html
    'script_tag',
]
