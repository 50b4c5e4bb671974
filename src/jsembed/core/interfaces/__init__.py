from .escaping import EscaperProtocol
from .templating import TemplateEngineProtocol

__all__ = [
    'EscaperProtocol',
    'TemplateEngineProtocol',
]
