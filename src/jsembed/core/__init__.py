"""Public surface for jsembed.core: value types and protocol interfaces."""

from jsembed.core.interfaces import (
    EscaperProtocol,
    TemplateEngineProtocol,
)
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

__all__ = [
    # Protocols
    'EscaperProtocol',
    'TemplateEngineProtocol',
    # Models
    'Binding',
    'Bindings',
    'EscapeOptions',
    'PlaceholderKind',
    'Raw',
    'Safe',
    'SerializedValue',
    'Template',
]
