from jsembed.rendering.data import bindings_from, raw_field, render_data
from jsembed.rendering.placeholder_scanner import PlaceholderScanner, PlaceholderToken
from jsembed.rendering.registry import (
    default_template,
    get_template,
    register_template,
    render_default,
    unregister_template,
)
from jsembed.rendering.template_engine import RendererConfig, TemplateRenderer, UnusedBindingPolicy, render

__all__ = [
    'PlaceholderScanner',
    'PlaceholderToken',
    'RendererConfig',
    'TemplateRenderer',
    'UnusedBindingPolicy',
    'bindings_from',
    'default_template',
    'get_template',
    'raw_field',
    'register_template',
    'render',
    'render_data',
    'render_default',
    'unregister_template',
]
