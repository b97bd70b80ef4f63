"""
docdown - Markdown documentation-site compiler

Extends Markdown with documentation components and rich code blocks.
"""

__version__ = "1.0.0"

from .lib import Document, ComponentRegistry, SiteBuilder, LOG, state_connectToLogger

__all__ = ["Document", "ComponentRegistry", "SiteBuilder", "LOG", "state_connectToLogger", "__version__"]
