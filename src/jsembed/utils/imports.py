"""
Dynamic loading of template data objects for the CLI.

References use the "module.path:AttrName" form. The attribute may be a
data object, or a zero-argument callable (class or factory function) that
returns one.

Public API:
    - load_object_from_ref(ref): object
    - load_data_from_ref(ref): object
"""
from __future__ import annotations

import dataclasses
import importlib
from typing import Any


def load_object_from_ref(ref: str) -> Any:
    """Load an attribute from a module given a 'module:attr' reference.

    Dotted attribute paths ('module:Outer.inner') are followed.

    Raises:
        ImportError: If the reference is malformed, or the module fails to
            import for any reason.
    """
    module_name, sep, attr_path = (ref or '').partition(':')
    if not module_name or not sep or not attr_path:
        raise ImportError(f"Invalid reference '{ref}'. Expected 'module.path:AttrName'.")
    try:
        obj: Any = importlib.import_module(module_name)
    except Exception as exc:
        raise ImportError(f"Failed to import module '{module_name}': {exc}") from exc
    for part in attr_path.split('.'):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ImportError(f"'{module_name}' has no attribute '{attr_path}'") from exc
    return obj


def load_data_from_ref(ref: str) -> Any:
    """Resolve *ref* and call it when it is a factory rather than a data object."""
    obj = load_object_from_ref(ref)
    is_instance = dataclasses.is_dataclass(obj) and not isinstance(obj, type)
    if callable(obj) and not is_instance:
        try:
            return obj()
        except Exception as exc:
            raise ImportError(f"Calling '{ref}' failed: {exc}") from exc
    return obj
