"""
placeholder_scanner – Tokenizes script templates into literal runs and placeholders.

Recognized placeholders:

  • __TEMPLATE_<name>__ → safe placeholder (value is escaped)
  • __RAW_<name>__      → raw placeholder (value inserted verbatim)

<name> is one or more alphanumeric runs joined by single underscores.
Anything that does not match exactly (e.g. "__RAW___", "__TEMPLATE_a b__")
is left in the literal text untouched.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

from jsembed.constants import NAME_PATTERN, PLACEHOLDER_CLOSE, PLACEHOLDER_OPEN, PLACEHOLDER_SEPARATOR
from jsembed.core.models import PlaceholderKind


@dataclass(frozen=True)
class PlaceholderToken:
    kind: PlaceholderKind
    name: str
    start: int
    end: int

    @property
    def text(self) -> str:
        return self.kind.token(self.name)


Segment = Union[str, PlaceholderToken]


class PlaceholderScanner:
    """Left-to-right, non-overlapping placeholder scanner.

    Matches never overlap and the scanner does not look back into what it
    already consumed, so the output of :meth:`scan` partitions the input:
    joining literal runs and token texts reproduces the template exactly.
    """

    _TOKEN_RX = re.compile(
        re.escape(PLACEHOLDER_OPEN)
        + '(' + '|'.join(re.escape(k.value) for k in PlaceholderKind) + ')'
        + re.escape(PLACEHOLDER_SEPARATOR)
        + '(' + NAME_PATTERN + ')'
        + re.escape(PLACEHOLDER_CLOSE)
    )

    def scan(self, text: str) -> Iterator[Segment]:
        """Yield literal runs (``str``) and :class:`PlaceholderToken` objects in order."""
        pos = 0
        for m in self._TOKEN_RX.finditer(text):
            if m.start() > pos:
                yield text[pos:m.start()]
            yield PlaceholderToken(PlaceholderKind(m.group(1)), m.group(2), m.start(), m.end())
            pos = m.end()
        if pos < len(text):
            yield text[pos:]

    def tokens(self, text: str) -> List[PlaceholderToken]:
        return [seg for seg in self.scan(text) if isinstance(seg, PlaceholderToken)]

    def references(self, text: str) -> List[Tuple[PlaceholderKind, str]]:
        """Distinct ``(kind, name)`` pairs in order of first appearance."""
        seen: List[Tuple[PlaceholderKind, str]] = []
        for tok in self.tokens(text):
            key = (tok.kind, tok.name)
            if key not in seen:
                seen.append(key)
        return seen
