"""
Registry of default templates per data type.

This registry provides:
- `register_template(cls, template)`
- `get_template(cls)`
- `unregister_template(cls)`
- `default_template(source=None, *, path=None)` class decorator
- `render_default(obj)`

Registration is expected at import/startup time; renders only read it.
Lookups follow the MRO, so subclasses inherit their base's template.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TypeVar, Union

from jsembed.core.models import Template
from jsembed.errors import TemplateNotRegistered
from jsembed.logging.helpers import get_logger
from jsembed.rendering.data import render_data
from jsembed.rendering.template_engine import TemplateRenderer

T = TypeVar('T', bound=type)

_TEMPLATES: Dict[type, Template] = {}
logger = get_logger('registry')


def register_template(cls: type, template: Union[Template, str]) -> Template:
    if not isinstance(cls, type):
        raise TypeError(f'expected a class, got {type(cls).__name__}')
    tpl = template if isinstance(template, Template) else Template(template, name=cls.__qualname__)
    if cls in _TEMPLATES:
        logger.debug('replacing default template for %s', cls.__qualname__)
    _TEMPLATES[cls] = tpl
    return tpl


def unregister_template(cls: type) -> None:
    _TEMPLATES.pop(cls, None)


def get_template(cls: type) -> Optional[Template]:
    for base in getattr(cls, '__mro__', (cls,)):
        tpl = _TEMPLATES.get(base)
        if tpl is not None:
            return tpl
    return None


def _resolve_path(cls: type, path: Union[str, Path]) -> Path:
    """Relative paths resolve against the directory of the module defining *cls*."""
    p = Path(path)
    if p.is_absolute():
        return p
    module = sys.modules.get(cls.__module__)
    module_file = getattr(module, '__file__', None)
    if module_file:
        return Path(module_file).resolve().parent / p
    return p


def default_template(
    source: Optional[str] = None,
    *,
    path: Optional[Union[str, Path]] = None,
) -> Callable[[T], T]:
    """Class decorator registering the default template of the decorated type.

    Exactly one of *source* (template text) or *path* (file loaded once, at
    decoration time) must be given.
    """
    if (source is None) == (path is None):
        raise ValueError('default_template() needs exactly one of source or path')

    def _decorate(cls: T) -> T:
        if path is not None:
            tpl = Template.from_path(_resolve_path(cls, path))
        else:
            tpl = Template(source, name=cls.__qualname__)  # type: ignore[arg-type]
        register_template(cls, tpl)
        return cls

    return _decorate


def render_default(obj: Any, *, renderer: Optional[TemplateRenderer] = None) -> str:
    """Render *obj* with the default template registered for its type."""
    tpl = get_template(type(obj))
    if tpl is None:
        raise TemplateNotRegistered(type(obj).__qualname__)
    return render_data(obj, tpl, renderer=renderer)
