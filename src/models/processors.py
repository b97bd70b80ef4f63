"""
Processor specification and metadata models

Defines the structure and categories of docdown pipeline processors for
validation, ordering, and registry management.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import ProcessingContext


# Processors that declare no priority run after every built-in stage
DEFAULT_PRIORITY: int = 100

Stage = Callable[[str, "ProcessingContext"], str]


class ProcessorCategory(Enum):
    """
    Categories of docdown processors

    Used for organization and documentation generation.
    """
    IMPORT = "import"          # <<< @/path snippet imports
    CODE = "code"              # fenced code block features and rendering
    BLOCK = "block"            # :::callout, :::tabs, :::steps, ...
    INLINE = "inline"          # :badge[..], :icon:
    STRUCTURE = "structure"    # heading anchors, toc, table wrapper


def stage_identity(text: str, context: "ProcessingContext") -> str:
    """Default stage: return the input untouched"""
    return text


@dataclass(frozen=True)
class ProcessorSpec:
    """
    Specification for a docdown processor

    A processor contributes a preprocess step (Markdown -> Markdown) and/or
    a postprocess step (HTML -> HTML). Both default to identity. Specs are
    immutable once built; the registry orders them by ascending priority,
    ties resolved by registration order.

    Attributes:
        name: Unique processor name
        category: Category for organization
        description: Human-readable description
        priority: Ordering key, lower runs earlier
        preprocess: Stage applied to raw Markdown before conversion
        postprocess: Stage applied to rendered HTML after conversion
        examples: Example markup handled by the processor
    """
    name: str
    category: ProcessorCategory
    description: str
    priority: int = DEFAULT_PRIORITY
    preprocess: Stage = stage_identity
    postprocess: Stage = stage_identity
    examples: Tuple[str, ...] = field(default_factory=tuple)
