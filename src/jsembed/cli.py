from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from jsembed.core.models import Binding, Bindings, EscapeOptions, Raw, Safe, SerializedValue, Template, read_text
from jsembed.errors import JsEmbedError, TemplateNotRegistered
from jsembed.escaping.escaper import JsonParseEscaper
from jsembed.html import script_tag
from jsembed.logging.helpers import get_logger, setup_base_logger
from jsembed.parsing.parser import ENV_UNUSED, _build_parser
from jsembed.rendering.data import bindings_from
from jsembed.rendering.registry import get_template
from jsembed.rendering.template_engine import RendererConfig, TemplateRenderer, UnusedBindingPolicy
from jsembed.utils.imports import load_data_from_ref

logger = get_logger('cli')


def _configure_logging(enable_json: bool) -> None:
    """Configure process-wide logging, either JSON or plain text."""
    prev = getattr(_configure_logging, '_configured_mode', None)
    if prev is not None and prev == bool(enable_json):
        return
    setup_base_logger(json_logs=enable_json, level=logging.INFO)
    setattr(_configure_logging, '_configured_mode', bool(enable_json))


def _escape_options(ns: argparse.Namespace) -> EscapeOptions:
    return EscapeOptions(
        escape_html_sensitive=ns.escape_html,
        escape_script_tag_close=ns.escape_script_close,
        escape_line_separators=ns.escape_line_separators,
    )


def _unused_policy(value: str) -> UnusedBindingPolicy:
    try:
        return UnusedBindingPolicy(value.strip().lower())
    except ValueError:
        raise JsEmbedError(
            f"invalid unused-binding policy {value!r} (from --unused or ${ENV_UNUSED}); "
            "expected ignore, warn or error"
        ) from None


def _read_stdin() -> str:
    try:
        return sys.stdin.read()
    except UnicodeDecodeError as exc:
        raise JsEmbedError(f'<stdin>: undecodable input ({exc.reason})') from exc


def _flag_bindings(ns: argparse.Namespace) -> Dict[str, Binding]:
    """Bindings from --safe/--safe-file/--raw/--raw-file, later flags winning."""
    items: Dict[str, Binding] = {}
    for name, text in ns.safe:
        items[name] = Safe(SerializedValue(text))
    for name, path in ns.safe_file:
        items[name] = Safe(SerializedValue(read_text(path).strip()))
    for name, text in ns.raw:
        items[name] = Raw(text)
    for name, path in ns.raw_file:
        items[name] = Raw(read_text(path))
    return items


class JsEmbed:
    """Command-line front end; :meth:`run` is the test-friendly entry point."""

    @classmethod
    def run(cls, argv: Sequence[str]) -> str:
        """Execute the CLI with *argv* and return the produced text.

        When ``-o`` is given the text is also written to that file.
        Library errors propagate as :class:`JsEmbedError`.
        """
        return cls.run_namespace(_build_parser().parse_args(list(argv)))

    @classmethod
    def run_namespace(cls, ns: argparse.Namespace) -> str:
        _configure_logging(ns.json_logs)

        if ns.command == 'escape':
            out = cls._escape(ns)
        elif ns.command == 'render':
            out = cls._render(ns)
        else:
            out = cls._inspect(ns)

        if ns.output:
            Path(ns.output).write_text(out, encoding='utf-8')
            logger.info('✔ output written → %s', ns.output)
        return out

    @staticmethod
    def _escape(ns: argparse.Namespace) -> str:
        text = _read_stdin() if ns.json == '-' else ns.json
        # Surrounding whitespace is insignificant in JSON text.
        escaper = JsonParseEscaper(_escape_options(ns), logger=get_logger('escape'))
        return escaper.escape(text.strip()) + '\n'

    @staticmethod
    def _render(ns: argparse.Namespace) -> str:
        data = load_data_from_ref(ns.data_ref) if ns.data_ref else None

        if ns.template:
            template = Template.from_path(ns.template)
        elif data is not None:
            template = get_template(type(data))
            if template is None:
                raise TemplateNotRegistered(type(data).__qualname__)
        else:
            raise JsEmbedError('render needs a TEMPLATE file or --data with a registered default template')

        bindings = Bindings()
        if data is not None:
            try:
                bindings = bindings_from(data)
            except TypeError as exc:
                raise JsEmbedError(f'--data {ns.data_ref}: {exc}') from exc
        bindings = bindings.merged(_flag_bindings(ns))

        renderer = TemplateRenderer(
            RendererConfig(escape=_escape_options(ns), unused=_unused_policy(ns.unused)),
            logger=get_logger('render'),
        )
        out = renderer.render(template, bindings)
        if ns.script_tag:
            out = script_tag(out, nonce=ns.nonce) + '\n'
        return out

    @staticmethod
    def _inspect(ns: argparse.Namespace) -> str:
        template = Template.from_path(ns.template)
        lines: List[str] = [
            f'{kind.label}\t{name}\t{kind.token(name)}'
            for kind, name in TemplateRenderer().placeholders(template)
        ]
        return ''.join(line + '\n' for line in lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Console-script entry point; returns the process exit code."""
    ns = _build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    try:
        out = JsEmbed.run_namespace(ns)
    except (JsEmbedError, OSError, ImportError) as exc:
        logger.error('✘ %s', exc)
        return 1
    if not ns.output:
        sys.stdout.write(out)
    return 0


if __name__ == '__main__':
    sys.exit(main())
