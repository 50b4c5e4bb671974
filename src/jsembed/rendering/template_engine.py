"""
template_engine – Concrete TemplateEngineProtocol implementation for jsembed.

Renders script templates in a single pass:

  • __TEMPLATE_<name>__ → Safe binding, escaped into JSON.parse('...')
  • __RAW_<name>__      → Raw binding, inserted verbatim

Substituted values are appended to the output buffer and never rescanned,
so a bound value that looks like a placeholder stays literal text. A
render either returns the complete output or raises; there is no partial
result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Set, Tuple, Union

from jsembed.core.interfaces.escaping import EscaperProtocol
from jsembed.core.interfaces.templating import TemplateEngineProtocol
from jsembed.core.models import Binding, Bindings, EscapeOptions, PlaceholderKind, Template
from jsembed.errors import MissingBinding, UnusedBinding
from jsembed.escaping.escaper import JsonParseEscaper
from jsembed.logging.helpers import get_logger, trace_render
from jsembed.rendering.placeholder_scanner import PlaceholderScanner, PlaceholderToken


class UnusedBindingPolicy(str, Enum):
    """What to do with bindings that no placeholder references."""

    IGNORE = 'ignore'
    WARN = 'warn'
    ERROR = 'error'


@dataclass(frozen=True)
class RendererConfig:
    """Renderer settings; the defaults are safe for inline <script> embedding."""

    escape: EscapeOptions = field(default_factory=EscapeOptions.default)
    unused: UnusedBindingPolicy = UnusedBindingPolicy.IGNORE

    def __post_init__(self) -> None:
        object.__setattr__(self, 'unused', UnusedBindingPolicy(self.unused))


def _as_template(template: Union[Template, str]) -> Template:
    if isinstance(template, Template):
        return template
    if isinstance(template, str):
        return Template(template)
    raise TypeError(f'expected Template or str, got {type(template).__name__}')


def _as_bindings(bindings: Optional[Mapping[str, Binding]]) -> Bindings:
    if isinstance(bindings, Bindings):
        return bindings
    return Bindings(bindings or {})


class TemplateRenderer(TemplateEngineProtocol):
    """Safe/raw placeholder template engine.

    The renderer holds no per-call state; one instance can serve any number
    of concurrent renders.
    """

    def __init__(
        self,
        config: Optional[RendererConfig] = None,
        *,
        escaper: Optional[EscaperProtocol] = None,
        scanner: Optional[PlaceholderScanner] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config or RendererConfig()
        self._escaper = escaper or JsonParseEscaper(self._config.escape, logger=logger)
        self._scanner = scanner or PlaceholderScanner()
        self._log = logger or get_logger('render')

    @property
    def config(self) -> RendererConfig:
        return self._config

    def render(  # type: ignore[override]
        self,
        template: Union[Template, str],
        bindings: Optional[Mapping[str, Binding]] = None,
    ) -> str:
        """Render *template* with *bindings*.

        Raises:
            MissingBinding: a placeholder has no binding of its kind.
            UnusedBinding: only with ``UnusedBindingPolicy.ERROR``.
        """
        tpl = _as_template(template)
        bound = _as_bindings(bindings)

        out: List[str] = []
        used: Set[str] = set()
        escaped: Dict[str, str] = {}
        for segment in self._scanner.scan(tpl.text):
            if isinstance(segment, str):
                out.append(segment)
                continue
            out.append(self._substitute(segment, bound, tpl, escaped))
            used.add(segment.name)

        self._check_unused(bound, used, tpl)
        trace_render(
            self._log,
            'rendered template',
            template=tpl.name,
            placeholders=len(used),
            size=sum(len(s) for s in out),
        )
        return ''.join(out)

    def placeholders(self, template: Union[Template, str]) -> List[Tuple[PlaceholderKind, str]]:
        """Return the distinct ``(kind, name)`` pairs referenced by *template*."""
        return self._scanner.references(_as_template(template).text)

    def _substitute(
        self,
        token: PlaceholderToken,
        bindings: Bindings,
        template: Template,
        escaped: Dict[str, str],
    ) -> str:
        binding = bindings.lookup(token.name, token.kind)
        if binding is None:
            raise MissingBinding(token.name, token.kind, template.name)
        if token.kind is PlaceholderKind.RAW:
            return binding.text  # type: ignore[union-attr]
        if token.name not in escaped:
            escaped[token.name] = self._escaper.escape(binding.value)  # type: ignore[union-attr]
        return escaped[token.name]

    def _check_unused(self, bindings: Bindings, used: Set[str], template: Template) -> None:
        unused = sorted(name for name in bindings if name not in used)
        if not unused:
            return
        policy = self._config.unused
        if policy is UnusedBindingPolicy.ERROR:
            raise UnusedBinding(unused, template.name)
        if policy is UnusedBindingPolicy.WARN:
            self._log.warning('%s: unused binding(s): %s', template.name, ', '.join(unused))
        else:
            trace_render(self._log, 'ignoring unused bindings', template=template.name, names=unused)


def render(
    template: Union[Template, str],
    bindings: Optional[Mapping[str, Binding]] = None,
    *,
    options: Optional[EscapeOptions] = None,
    unused: UnusedBindingPolicy = UnusedBindingPolicy.IGNORE,
) -> str:
    """One-shot helper around :class:`TemplateRenderer`."""
    config = RendererConfig(escape=options or EscapeOptions.default(), unused=UnusedBindingPolicy(unused))
    return TemplateRenderer(config).render(template, bindings)
