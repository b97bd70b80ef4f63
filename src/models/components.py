"""
Component models

Data shared between the block components, the icon detector and the
document structure processors.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional


class IconSource(Enum):
    """Where an icon comes from, and therefore how it is rendered"""
    PHOSPHOR = "phosphor"
    FILE_EXTENSION = "file-extension"


@dataclass(frozen=True)
class IconResolution:
    """
    Result of icon detection.

    ``icon`` and ``source`` are both None when no icon applies.
    ``label`` is the display text with any manual ``:icon:`` prefix removed.
    """
    label: Optional[str]
    icon: Optional[str] = None
    source: Optional[IconSource] = None

    @property
    def found(self) -> bool:
        return self.icon is not None


@dataclass
class TabEntry:
    """
    One tab of a tab group, in source order.

    Attributes:
        name: Display name (manual icon prefix already consumed)
        content: Rendered HTML body
        icon: Icon name, or None
        icon_source: IconSource, or None meaning no icon is shown
    """
    name: str
    content: str
    icon: Optional[str] = None
    icon_source: Optional[IconSource] = None


@dataclass
class TocEntry:
    """Heading collected for the table of contents"""
    level: int
    id: str
    text: str
    children: List["TocEntry"] = field(default_factory=list)


@dataclass
class FileTreeEntry:
    """
    One line of a ``filetree`` fence.

    Attributes:
        name: File or folder name, trailing ``/`` and `` *`` removed
        is_folder: Name was written with a trailing ``/``
        highlighted: Line ended with `` *``
        comment: Text after `` # ``, or None
        indent: Leading spaces on the source line
        children: Entries nested below a folder
    """
    name: str
    is_folder: bool = False
    highlighted: bool = False
    comment: Optional[str] = None
    indent: int = 0
    children: List["FileTreeEntry"] = field(default_factory=list)
