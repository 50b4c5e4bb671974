from __future__ import annotations
from typing import Protocol, Union, runtime_checkable

from jsembed.core.models import EscapeOptions, SerializedValue


@runtime_checkable
class EscaperProtocol(Protocol):
    """Turns JSON text into a JavaScript expression evaluating to the same value."""

    @property
    def options(self) -> EscapeOptions:
        ...

    def escape(self, value: Union[SerializedValue, str]) -> str:
        ...
