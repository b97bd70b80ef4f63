"""
Inline control marker patterns

Every marker family (diff, focus, error, warning) is built from the same
list of comment wrappers, so a token written as ``// [!code focus]`` is
recognized exactly like ``<!-- [!code focus] -->`` or ``; [!code focus]``.
Annotation markers such as ``# (1)`` use the same wrappers but only count
at the end of a line.

Each compiled pattern consumes the horizontal whitespace in front of the
comment and nothing after it, so stripping a match leaves ``const y = 2;``
rather than ``const y = 2; `` and two markers written side by side are
matched separately.
"""

import re
from typing import Dict, Pattern, Tuple

from ..models.codeblock import MarkerKind

_WS = r"[ \t]"

# (opener, closer) regex fragments, multi-character openers first
COMMENT_WRAPPERS: Tuple[Tuple[str, str], ...] = (
    (r"<!--", r"-->"),
    (r"/\*", r"\*/"),
    (r"//", r""),
    (r"--", r""),
    (r"#", r""),
    (r";", r""),
)

DIFF_TOKEN = rf"\[!code{_WS}*(\+\+|--){_WS}*\]"
FOCUS_TOKEN = rf"\[!code{_WS}+(focus){_WS}*\]"
ERROR_TOKEN = rf"\[!code{_WS}+(error){_WS}*\]"
WARNING_TOKEN = rf"\[!code{_WS}+(warning){_WS}*\]"
ANNOTATION_TOKEN = r"\((\d+)\)"


def markerPattern_build(token: str, line_end: bool = False) -> Pattern[str]:
    """
    Compile one marker family across all comment wrappers.

    Args:
        token: Regex for the bracketed marker, with one capture group
        line_end: Only match a marker that ends the line

    Returns:
        Pattern whose single non-None group is the captured token word
    """
    alternatives = [
        f"{opener}{_WS}*{token}" + (f"{_WS}*{closer}" if closer else "")
        for opener, closer in COMMENT_WRAPPERS
    ]
    tail = f"{_WS}*$" if line_end else ""
    return re.compile(f"{_WS}*(?:" + "|".join(alternatives) + ")" + tail)


DIFF_PATTERN = markerPattern_build(DIFF_TOKEN)
FOCUS_PATTERN = markerPattern_build(FOCUS_TOKEN)
ERROR_PATTERN = markerPattern_build(ERROR_TOKEN)
WARNING_PATTERN = markerPattern_build(WARNING_TOKEN)
ANNOTATION_PATTERN = markerPattern_build(ANNOTATION_TOKEN, line_end=True)

MARKER_FAMILIES: Dict[str, Pattern[str]] = {
    "diff": DIFF_PATTERN,
    "focus": FOCUS_PATTERN,
    "error": ERROR_PATTERN,
    "warning": WARNING_PATTERN,
}


def markerKind_resolve(match: re.Match[str]) -> MarkerKind:
    """Map a match from any marker family to its MarkerKind"""
    word = next(group for group in match.groups() if group)
    if word == "++":
        return MarkerKind.ADDITION
    if word == "--":
        return MarkerKind.DELETION
    return MarkerKind(word)
