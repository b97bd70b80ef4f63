"""
docdown - Markdown documentation-site compiler

Processor pipeline, components and site builder.
"""

__version__ = "1.0.0"

from .log import LOG, state_connectToLogger
from .registry import ComponentRegistry, ProcessorRegistrationError
from .document import Document
from .builder import SiteBuilder
from .variables import variables_load

__all__ = [
    "ComponentRegistry",
    "ProcessorRegistrationError",
    "Document",
    "SiteBuilder",
    "variables_load",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
