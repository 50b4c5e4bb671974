# jsembed/parsing/parser.py
from __future__ import annotations

import argparse
import os
from typing import Tuple

from jsembed.rendering.template_engine import UnusedBindingPolicy

ENV_UNUSED = 'JSEMBED_UNUSED'
ENV_JSON_LOGS = 'JSEMBED_JSON_LOGS'


def _assignment(text: str) -> Tuple[str, str]:
    """argparse type for NAME=VALUE pairs (split on the first '=')."""
    name, sep, value = text.partition('=')
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{text}'")
    return name, value


def _env_flag(name: str) -> bool:
    return os.getenv(name, '').strip().lower() in ('1', 'true', 'yes', 'on')


def _add_escape_options(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group('Escaping')
    g.add_argument(
        '--no-html-escape',
        dest='escape_html',
        action='store_false',
        help='Do not turn <, > and & into \\u escapes (only safe outside inline <script>).',
    )
    g.add_argument(
        '--no-script-close-escape',
        dest='escape_script_close',
        action='store_false',
        help='Do not rewrite "</script" as "<\\/script".',
    )
    g.add_argument(
        '--no-line-separator-escape',
        dest='escape_line_separators',
        action='store_false',
        help='Keep U+2028/U+2029 unescaped.',
    )


def _add_common(p: argparse.ArgumentParser) -> None:
    g = p.add_argument_group('Miscellaneous')
    g.add_argument(
        '--json-logs',
        dest='json_logs',
        action='store_true',
        default=_env_flag(ENV_JSON_LOGS),
        help=f'Emit logs as JSON (default from ${ENV_JSON_LOGS}).',
    )
    g.add_argument(
        '-o',
        '--output',
        metavar='FILE',
        dest='output',
        help='Write the result to FILE instead of stdout.',
    )


def _build_parser() -> argparse.ArgumentParser:
    """Build the jsembed CLI argument parser."""
    p = argparse.ArgumentParser(
        prog='jsembed',
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            'jsembed – embed JSON data into JavaScript safely\n'
            'Escapes JSON text into JSON.parse(...) expressions and renders\n'
            'script templates with __TEMPLATE_name__ / __RAW_name__ placeholders.'
        ),
    )
    sub = p.add_subparsers(dest='command', metavar='COMMAND')
    sub.required = True

    esc = sub.add_parser('escape', help='Escape JSON text into a JSON.parse(...) expression.')
    esc.add_argument(
        'json',
        nargs='?',
        default='-',
        help="JSON text to escape; '-' or omitted reads stdin.",
    )
    _add_escape_options(esc)
    _add_common(esc)

    rnd = sub.add_parser('render', help='Render a script template file.')
    rnd.add_argument(
        'template',
        nargs='?',
        help='Template file. Optional with --data when the data type has a default template.',
    )
    g_bind = rnd.add_argument_group('Bindings')
    g_bind.add_argument(
        '--safe',
        metavar='NAME=JSON',
        type=_assignment,
        action='append',
        default=[],
        help='Bind JSON text to __TEMPLATE_NAME__ (repeatable).',
    )
    g_bind.add_argument(
        '--safe-file',
        metavar='NAME=PATH',
        type=_assignment,
        action='append',
        default=[],
        help='Bind the JSON text stored in PATH to __TEMPLATE_NAME__.',
    )
    g_bind.add_argument(
        '--raw',
        metavar='NAME=TEXT',
        type=_assignment,
        action='append',
        default=[],
        help='Bind trusted script TEXT to __RAW_NAME__ (repeatable).',
    )
    g_bind.add_argument(
        '--raw-file',
        metavar='NAME=PATH',
        type=_assignment,
        action='append',
        default=[],
        help='Bind the script stored in PATH to __RAW_NAME__.',
    )
    g_bind.add_argument(
        '--data',
        metavar='MODULE:ATTR',
        dest='data_ref',
        help=(
            'Dataclass instance, mapping, or zero-argument factory to derive\n'
            'bindings from. Explicit --safe/--raw flags win on name clashes.'
        ),
    )
    g_out = rnd.add_argument_group('Template & output')
    g_out.add_argument(
        '--unused',
        choices=[policy.value for policy in UnusedBindingPolicy],
        default=os.getenv(ENV_UNUSED, UnusedBindingPolicy.IGNORE.value),
        help=f'Policy for bindings no placeholder uses (default from ${ENV_UNUSED}, else ignore).',
    )
    g_out.add_argument(
        '--script-tag',
        dest='script_tag',
        action='store_true',
        help='Wrap the rendered script in a verified <script> element.',
    )
    g_out.add_argument(
        '--nonce',
        metavar='VALUE',
        help='nonce attribute for --script-tag.',
    )
    _add_escape_options(rnd)
    _add_common(rnd)

    ins = sub.add_parser('inspect', help='List the placeholders a template references.')
    ins.add_argument('template', help='Template file.')
    _add_common(ins)

    return p
