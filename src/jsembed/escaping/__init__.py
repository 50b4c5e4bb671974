from jsembed.escaping.escaper import JsonParseEscaper, compile_rules, escape_json_parse
from jsembed.escaping.serializer import serialize, to_script

__all__ = [
    'JsonParseEscaper',
    'compile_rules',
    'escape_json_parse',
    'serialize',
    'to_script',
]
