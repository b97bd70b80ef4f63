"""
Code block models

Per-fence data gathered from raw Markdown before conversion and consumed
when the rendered code block is finalized.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set


class DiffKind(Enum):
    """Kind of a diff marker on a source line"""
    ADDITION = "add"
    DELETION = "remove"


class MarkerKind(Enum):
    """Every inline control marker the feature extractor recognizes"""
    ADDITION = "addition"
    DELETION = "deletion"
    FOCUS = "focus"
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class LineNumberOption:
    """
    Line-number directive from a fence info string.

    ``:line-numbers`` -> enabled, start 1
    ``:line-numbers=N`` -> enabled, start N
    ``:no-line-numbers`` -> disabled
    """
    enabled: bool
    start: int = 1

    @classmethod
    def option_parse(cls, directive: Optional[str]) -> Optional["LineNumberOption"]:
        """
        Parse a ``:line-numbers`` style directive.

        Args:
            directive: Directive text including the leading colon, or None

        Returns:
            LineNumberOption, or None when the directive is absent or unknown
        """
        if not directive:
            return None
        directive = directive.strip()
        if directive == ":no-line-numbers":
            return cls(enabled=False)
        if directive == ":line-numbers":
            return cls(enabled=True)
        if directive.startswith(":line-numbers="):
            value = directive.split("=", 1)[1]
            if value.isdigit():
                return cls(enabled=True, start=int(value))
        return None


@dataclass(frozen=True)
class Annotation:
    """Numbered note attached to one code line, rendered as a popover button"""
    number: int
    content: str


@dataclass
class CodeBlockFeatures:
    """
    Side-channel data for one fenced code block.

    All line numbers are 1-based and refer to the fence body before marker
    stripping: line 1 is the first line after the info string.

    Attributes:
        language: Declared language, or None
        title: Display title from ``[title]``, may carry a ``:icon:`` prefix
        line_numbers: Line-number directive, None when not declared
        highlights: Sorted, de-duplicated highlighted display lines
        diff_lines: Source line -> DiffKind
        focus_lines: Source lines marked focus
        error_lines: Source lines marked error
        warning_lines: Source lines marked warning
        annotations: Source line -> Annotation, filled by the annotation
            preprocessor from the ordered list after the fence
    """
    language: Optional[str] = None
    title: Optional[str] = None
    line_numbers: Optional[LineNumberOption] = None
    highlights: List[int] = field(default_factory=list)
    diff_lines: Dict[int, DiffKind] = field(default_factory=dict)
    focus_lines: Set[int] = field(default_factory=set)
    error_lines: Set[int] = field(default_factory=set)
    warning_lines: Set[int] = field(default_factory=set)
    annotations: Dict[int, Annotation] = field(default_factory=dict)

    @property
    def start_line(self) -> int:
        """First display line number"""
        return self.line_numbers.start if self.line_numbers else 1

    def lineWrapping_needed(self) -> bool:
        """True when any per-line state must be rendered"""
        return bool(
            self.highlights
            or self.diff_lines
            or self.focus_lines
            or self.error_lines
            or self.warning_lines
            or self.annotations
        )


@dataclass
class ExtractionResult:
    """Output of the feature extractor: cleaned Markdown plus per-fence data"""
    markdown: str
    blocks: List[CodeBlockFeatures] = field(default_factory=list)
