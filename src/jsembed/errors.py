"""Exception hierarchy for jsembed.

Every failure raised by the library derives from :class:`JsEmbedError` so
callers (and the CLI) can catch a single type. Rendering is all-or-nothing:
when one of these is raised, no output was produced.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Tuple

if TYPE_CHECKING:
    from jsembed.core.models import PlaceholderKind


class JsEmbedError(Exception):
    """Base class for all jsembed errors."""


class MalformedValue(JsEmbedError, ValueError):
    """The value is not valid JSON text, or cannot be serialized to it."""


class InvalidBindingName(JsEmbedError, ValueError):
    """A binding name cannot appear inside a placeholder."""

    def __init__(self, name: object) -> None:
        super().__init__(
            f'invalid binding name {name!r}: expected letters/digits joined by single underscores'
        )
        self.name = name


class MissingBinding(JsEmbedError, LookupError):
    """A placeholder has no binding of the matching kind."""

    def __init__(self, name: str, kind: PlaceholderKind, template: Optional[str] = None) -> None:
        self.name = name
        self.kind = kind
        self.template = template
        where = f' in {template}' if template else ''
        super().__init__(f'missing {kind.label} binding for placeholder {name!r}{where}')


class UnusedBinding(JsEmbedError):
    """Bindings were supplied that no placeholder references (strict policy only)."""

    def __init__(self, names: Iterable[str], template: Optional[str] = None) -> None:
        self.names: Tuple[str, ...] = tuple(names)
        self.template = template
        where = f' in {template}' if template else ''
        super().__init__(f"unused binding(s){where}: {', '.join(self.names)}")


class TemplateNotRegistered(JsEmbedError, LookupError):
    """No default template is registered for a type."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f'no default template registered for {type_name}')


class UnsafeScript(JsEmbedError, ValueError):
    """Script text would not survive embedding inside a <script> element."""
