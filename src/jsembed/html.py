"""
html – Wrap rendered scripts in an inline ``<script>`` element.

The element is built and serialized with lxml, then parsed back: if the
parsed element does not hold exactly the script text (for instance because
a raw fragment contains ``</script>``), :class:`UnsafeScript` is raised
instead of returning markup that would let the script escape its element.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

import lxml.html
from lxml import etree

from jsembed.errors import UnsafeScript
from jsembed.logging.helpers import get_logger, trace_render

logger = get_logger('html')


def _normalize_newlines(text: str) -> str:
    return text.replace('\r\n', '\n').replace('\r', '\n')


def _verify(markup: str, script: str, log: logging.Logger) -> None:
    try:
        element = lxml.html.fragment_fromstring(markup)
    except (etree.ParserError, ValueError) as exc:
        raise UnsafeScript(f'script does not stay inside its <script> element: {exc}') from exc
    parsed = element.text or ''
    if element.tag != 'script' or len(element) or element.tail or _normalize_newlines(parsed) != _normalize_newlines(script):
        raise UnsafeScript('script does not stay inside its <script> element')
    trace_render(log, 'verified script element', size=len(script))


def script_tag(
    script: str,
    *,
    nonce: Optional[str] = None,
    script_type: Optional[str] = None,
    attrs: Optional[Dict[str, str]] = None,
) -> str:
    """Return ``<script ...>script</script>`` markup for inline embedding.

    Attribute values are escaped by lxml. The script body is emitted as-is,
    so it must already be safe for the HTML ``<script>`` content model;
    templates rendered with the default escape options are.
    """
    attrib: Dict[str, str] = dict(attrs or {})
    if script_type is not None:
        attrib['type'] = script_type
    if nonce is not None:
        attrib['nonce'] = nonce
    try:
        element = lxml.html.Element('script', attrib)
        element.text = script
        markup = lxml.html.tostring(element, encoding='unicode')
    except ValueError as exc:
        # lxml rejects NUL bytes and other XML-incompatible characters.
        raise UnsafeScript(f'script cannot be serialized into HTML: {exc}') from exc
    _verify(markup, script, logger)
    return markup
