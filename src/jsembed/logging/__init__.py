from jsembed.logging.helpers import JsonLogFormatter, get_logger, is_trace_enabled, setup_base_logger, trace_render

__all__ = [
    'JsonLogFormatter',
    'get_logger',
    'is_trace_enabled',
    'setup_base_logger',
    'trace_render',
]
