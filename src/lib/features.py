"""
Code block feature extraction

Reads each fence's info string (language, title, line-number directive,
highlight spec) and strips ``[!code ...]`` markers from its body, recording
which source lines carried which marker. The cleaned Markdown is what the
converter sees; the recorded CodeBlockFeatures are re-attached to the
rendered blocks afterwards.

Info string grammar (every part optional, order fixed):

    language [space "[" title "]"] [":" line-number-directive] [space "{" highlights "}"]

Example:
    ```js [app.js]:line-numbers=10 {1,3-4}
"""

import re
from typing import Dict, List, Optional, Sequence, Tuple

from ..models.codeblock import (
    CodeBlockFeatures,
    DiffKind,
    ExtractionResult,
    LineNumberOption,
    MarkerKind,
)
from .converter import BLOCK_OPTION
from .fences import Fence, fences_find, position_inRanges
from .patterns import MARKER_FAMILIES, markerKind_resolve

_INFO = re.compile(
    r"^(?P<lang>[^\s\[\]{}:]+)?"
    r"(?:[ \t]*\[(?P<title>[^\]]*)\])?"
    r"(?P<option>:[\w-]+(?:=\d+)?)?"
    r"(?:[ \t]*\{(?P<highlights>[^}]*)\})?"
    r"[ \t]*$"
)

LINKED_INFO = re.compile(r"^\{[^}]*\b" + BLOCK_OPTION + r"=(?P<id>\d+)[^}]*\}$")

# Fence languages owned by a component rather than rendered as code
COMPONENT_LANGUAGES = frozenset({"filetree"})


def highlights_parse(spec: Optional[str]) -> List[int]:
    """
    Parse a highlight spec such as ``1,3-5``.

    Args:
        spec: Comma separated integers and ``a-b`` ranges

    Returns:
        Sorted list of unique line numbers; malformed parts are ignored
    """
    if not spec:
        return []
    lines = set()
    for part in spec.split(","):
        part = part.strip()
        if re.fullmatch(r"\d+", part):
            lines.add(int(part))
        elif re.fullmatch(r"\d+[ \t]*-[ \t]*\d+", part):
            first, last = (int(value) for value in part.split("-"))
            lines.update(range(first, last + 1))
    return sorted(lines)


def info_parse(info: str) -> CodeBlockFeatures:
    """
    Parse a fence info string into a CodeBlockFeatures shell.

    Info strings that do not follow the grammar still yield their first
    word as the language.
    """
    info = info.strip()
    match = _INFO.match(info)
    if match is None:
        words = info.split()
        return CodeBlockFeatures(language=words[0] if words else None)

    title = match.group("title")
    return CodeBlockFeatures(
        language=match.group("lang"),
        title=title.strip() if title and title.strip() else None,
        line_numbers=LineNumberOption.option_parse(match.group("option")),
        highlights=highlights_parse(match.group("highlights")),
    )


def markers_strip(line: str) -> Tuple[str, List[MarkerKind]]:
    """
    Remove every control marker from one source line.

    Markers are found across all families, recorded in the order they
    appear and removed left to right. Text that follows a marker (a real
    trailing comment, say) is kept; whitespace left dangling at the end of
    the line is dropped.

    Args:
        line: Source line without its newline

    Returns:
        (cleaned line, marker kinds found in order of appearance)
    """
    found: List[Tuple[int, int, MarkerKind]] = []
    for pattern in MARKER_FAMILIES.values():
        for match in pattern.finditer(line):
            found.append((match.start(), match.end(), markerKind_resolve(match)))
    if not found:
        return line, []

    found.sort(key=lambda item: item[0])
    pieces: List[str] = []
    kinds: List[MarkerKind] = []
    cursor = 0
    for start, end, kind in found:
        if start < cursor:
            continue
        pieces.append(line[cursor:start])
        kinds.append(kind)
        cursor = end
    pieces.append(line[cursor:])
    return "".join(pieces).rstrip(" \t"), kinds


def body_clean(body: str, features: CodeBlockFeatures) -> str:
    """Strip markers from a fence body, filling the marker maps of features"""
    lines = body.split("\n")
    cleaned: List[str] = []
    for number, line in enumerate(lines, start=1):
        line, kinds = markers_strip(line)
        for kind in kinds:
            if kind is MarkerKind.ADDITION:
                features.diff_lines[number] = DiffKind.ADDITION
            elif kind is MarkerKind.DELETION:
                features.diff_lines[number] = DiffKind.DELETION
            elif kind is MarkerKind.FOCUS:
                features.focus_lines.add(number)
            elif kind is MarkerKind.ERROR:
                features.error_lines.add(number)
            elif kind is MarkerKind.WARNING:
                features.warning_lines.add(number)
        cleaned.append(line)
    return "\n".join(cleaned)


def fenceOpener_make(
    marker: str, language: Optional[str], block_id: Optional[int] = None
) -> str:
    """
    Opening line of a cleaned fence.

    Without a block id the opener is the plain ``marker + language``. With
    one, the language and the id travel in an attribute list the converter
    hands to the code formatter.
    """
    if block_id is None:
        return marker + (language or "")
    return f"{marker} {{ .{language or 'text'} {BLOCK_OPTION}={block_id} }}"


def fence_isLinked(fence: Fence) -> bool:
    """True for a fence already cleaned and given a block id"""
    return LINKED_INFO.match(fence.info) is not None


def fence_process(fence: Fence, block_id: Optional[int] = None) -> Tuple[str, CodeBlockFeatures]:
    """
    Extract the features of one fence.

    Args:
        fence: Fence to clean
        block_id: Index of the features in the document's recorded list,
            written into the cleaned opener when given

    Returns:
        (replacement text for fence.start:fence.end, features)
    """
    features = info_parse(fence.info)
    body = body_clean(fence.body, features)
    opener = fenceOpener_make(fence.marker, features.language, block_id)
    return f"{opener}\n{body}{fence.marker}", features


def features_extract(
    markdown: str, skip: Sequence[range] = (), first_id: Optional[int] = None
) -> ExtractionResult:
    """
    Extract features from every fence and return the cleaned Markdown.

    Every code fence is recorded, even one with no features. Fences that
    already carry a block id and fences of component languages (such as
    ``filetree``) are left alone and unrecorded.

    Args:
        markdown: Raw Markdown
        skip: Spans left untouched and unrecorded (tab and code-group
            containers render their own code blocks)
        first_id: Block id of the first recorded fence; when None the
            cleaned fences carry no id

    Returns:
        ExtractionResult with the cleaned Markdown and per-fence features

    Example:
        >>> result = features_extract("```js {2}\\na\\nb // [!code ++]\\n```")
        >>> result.markdown
        '```js\\na\\nb\\n```'
        >>> result.blocks[0].highlights, result.blocks[0].diff_lines
        ([2], {2: <DiffKind.ADDITION: 'add'>})
    """
    blocks: List[CodeBlockFeatures] = []
    pieces: List[str] = []
    cursor = 0
    for fence in fences_find(markdown):
        if position_inRanges(fence.start, skip) or fence_isLinked(fence):
            continue
        if fence.language in COMPONENT_LANGUAGES:
            continue
        block_id = None if first_id is None else first_id + len(blocks)
        replacement, features = fence_process(fence, block_id)
        pieces.append(markdown[cursor:fence.start])
        pieces.append(replacement)
        blocks.append(features)
        cursor = fence.end
    pieces.append(markdown[cursor:])
    return ExtractionResult(markdown="".join(pieces), blocks=blocks)


def features_summarize(features: CodeBlockFeatures) -> Dict[str, object]:
    """Plain-dict view of features, handy for logging"""
    return {
        "language": features.language,
        "title": features.title,
        "highlights": features.highlights,
        "diff": {line: kind.value for line, kind in features.diff_lines.items()},
        "focus": sorted(features.focus_lines),
        "error": sorted(features.error_lines),
        "warning": sorted(features.warning_lines),
    }
