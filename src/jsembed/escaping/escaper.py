"""
escaper – JSON text → ``JSON.parse('...')`` JavaScript expressions.

The JSON text is wrapped in a single-quoted JavaScript string and handed to
the runtime JSON parser instead of being inlined as a JS literal: JSON and
JS literal grammars disagree on a few edge cases, while a string literal
only needs a handful of escapes to be correct.

Every replacement below is a JavaScript string-literal escape, so the
string that reaches ``JSON.parse`` at runtime is exactly the input text.
All enabled rules are folded into one alternation regex and applied in a
single left-to-right pass, which means a backslash introduced by one rule
is never seen (and doubled) by another.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Pattern, Tuple, Union

from jsembed.constants import JSON_PARSE_CLOSE, JSON_PARSE_OPEN
from jsembed.core.interfaces.escaping import EscaperProtocol
from jsembed.core.models import EscapeOptions, SerializedValue
from jsembed.logging.helpers import get_logger, trace_render

# Always applied: these keep the single-quoted literal well formed. Raw CR/LF
# can only occur as insignificant JSON whitespace but would end a JS string.
_LITERAL_ESCAPES: Dict[str, str] = {
    '\\': '\\\\',
    "'": "\\'",
    '\n': '\\n',
    '\r': '\\r',
}

_HTML_ESCAPES: Dict[str, str] = {
    '<': '\\u003c',
    '>': '\\u003e',
    '&': '\\u0026',
}

_LINE_SEPARATOR_ESCAPES: Dict[str, str] = {
    '\N{LINE SEPARATOR}': '\\u2028',
    '\N{PARAGRAPH SEPARATOR}': '\\u2029',
}

# "</" is only rewritten when followed by "script" (any case).
_SCRIPT_CLOSE_RX = r'</(?=[sS][cC][rR][iI][pP][tT])'
_SCRIPT_CLOSE_REPLACEMENT = '<\\/'


def _char_class(chars: Dict[str, str]) -> str:
    return '[' + ''.join(re.escape(c) for c in chars) + ']'


def compile_rules(options: EscapeOptions) -> Tuple[Pattern[str], Dict[str, str]]:
    """Build the single-pass pattern and replacement table for *options*.

    HTML escaping is listed before the script-close rule so that, when both
    are on, ``<`` is turned into ``\\u003c`` rather than ``<\\/``.
    """
    table: Dict[str, str] = dict(_LITERAL_ESCAPES)
    alternatives: List[str] = [_char_class(_LITERAL_ESCAPES)]

    if options.escape_html_sensitive:
        table.update(_HTML_ESCAPES)
        alternatives.append(_char_class(_HTML_ESCAPES))
    if options.escape_script_tag_close:
        alternatives.append(_SCRIPT_CLOSE_RX)
    if options.escape_line_separators:
        table.update(_LINE_SEPARATOR_ESCAPES)
        alternatives.append(_char_class(_LINE_SEPARATOR_ESCAPES))

    return re.compile('|'.join(alternatives)), table


def _coerce(value: Union[SerializedValue, str]) -> SerializedValue:
    if isinstance(value, SerializedValue):
        return value
    if isinstance(value, str):
        return SerializedValue(value)
    raise TypeError(f'expected SerializedValue or JSON text, got {type(value).__name__}')


class JsonParseEscaper(EscaperProtocol):
    """Escaper producing ``JSON.parse('<escaped json>')`` expressions.

    Instances are immutable after construction and safe to share between
    threads.
    """

    def __init__(
        self,
        options: Optional[EscapeOptions] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._options = options or EscapeOptions.default()
        self._pattern, self._table = compile_rules(self._options)
        self._log = logger or get_logger('escape')

    @property
    def options(self) -> EscapeOptions:
        return self._options

    def escape_body(self, text: str) -> str:
        """Escape *text* for the inside of a single-quoted JS string literal."""
        return self._pattern.sub(self._replace, text)

    def escape(self, value: Union[SerializedValue, str]) -> str:
        """Return a JS expression that evaluates to the value of *value*.

        Plain strings are validated as JSON first; invalid text raises
        :class:`~jsembed.errors.MalformedValue` without producing output.
        """
        text = _coerce(value).text
        body = self.escape_body(text)
        trace_render(self._log, 'escaped json value', size=len(text), escaped_size=len(body))
        return f'{JSON_PARSE_OPEN}{body}{JSON_PARSE_CLOSE}'

    __call__ = escape

    def _replace(self, match: 're.Match[str]') -> str:
        token = match.group(0)
        return self._table.get(token, _SCRIPT_CLOSE_REPLACEMENT)


_DEFAULT_ESCAPER = JsonParseEscaper()


def escape_json_parse(
    value: Union[SerializedValue, str],
    options: Optional[EscapeOptions] = None,
) -> str:
    """Escape *value* into ``JSON.parse('...')`` using *options* (defaults if omitted)."""
    if options is None or options == _DEFAULT_ESCAPER.options:
        return _DEFAULT_ESCAPER.escape(value)
    return JsonParseEscaper(options).escape(value)
