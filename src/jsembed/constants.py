"""Project-wide constants used across modules.

Placeholder delimiters are fixed: they are part of the template contract
and are not configurable at runtime.
"""

# Safe placeholders: __TEMPLATE_<name>__ (value goes through the escaper).
SAFE_MARKER: str = 'TEMPLATE'
# Raw placeholders: __RAW_<name>__ (value is inserted verbatim).
RAW_MARKER: str = 'RAW'

PLACEHOLDER_OPEN: str = '__'
PLACEHOLDER_SEPARATOR: str = '_'
PLACEHOLDER_CLOSE: str = '__'

# Alphanumeric runs joined by single underscores. A double underscore always
# terminates the name, so "__TEMPLATE_a__b__" references "a".
NAME_PATTERN: str = r'[A-Za-z0-9]+(?:_[A-Za-z0-9]+)*'

JSON_PARSE_OPEN: str = "JSON.parse('"
JSON_PARSE_CLOSE: str = "')"

LOGGER_ROOT: str = 'jsembed'
