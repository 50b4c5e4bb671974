from __future__ import annotations
from typing import Mapping, Protocol, Union, runtime_checkable

from jsembed.core.models import Binding, Template


@runtime_checkable
class TemplateEngineProtocol(Protocol):
    """Protocol for placeholder-substituting script template engines."""

    def render(self, template: Union[Template, str], bindings: Mapping[str, Binding]) -> str:
        ...
