"""
Models package for docdown

Contains data structures and type definitions for the rendering pipeline.
"""

from .state import ProgramState, pipeline
from .processors import ProcessorSpec, ProcessorCategory, DEFAULT_PRIORITY
from .codeblock import (
    Annotation,
    CodeBlockFeatures,
    DiffKind,
    MarkerKind,
    LineNumberOption,
    ExtractionResult,
)
from .components import FileTreeEntry, IconResolution, IconSource, TabEntry, TocEntry
from .context import ProcessingContext

__all__ = [
    "ProgramState",
    "pipeline",
    "ProcessorSpec",
    "ProcessorCategory",
    "DEFAULT_PRIORITY",
    "Annotation",
    "CodeBlockFeatures",
    "DiffKind",
    "MarkerKind",
    "LineNumberOption",
    "ExtractionResult",
    "FileTreeEntry",
    "IconResolution",
    "IconSource",
    "TabEntry",
    "TocEntry",
    "ProcessingContext",
]
