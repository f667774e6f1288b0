"""
LaTeX escaping for user-supplied text.

Every character with syntactic meaning in LaTeX text mode is mapped to the
sequence that typesets it literally. The mapping is applied in a single pass
with str.translate, so the backslashes and braces introduced by one
replacement are never escaped again.
"""

import re
from typing import Optional

LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

_ESCAPE_TABLE = str.maketrans(LATEX_SPECIAL_CHARS)

# Longest sequences first so \textbackslash{} wins over shorter overlaps
_UNESCAPE_PATTERN = re.compile(
    "|".join(
        re.escape(seq) for seq in sorted(LATEX_SPECIAL_CHARS.values(), key=len, reverse=True)
    )
)
_UNESCAPE_MAP = {seq: char for char, seq in LATEX_SPECIAL_CHARS.items()}


def escape_latex(text: Optional[str]) -> str:
    """
    Escape text for safe insertion into a LaTeX document.

    Args:
        text: Arbitrary text, or None

    Returns:
        Markup-safe text ("" for None)

    Example:
        >>> escape_latex("AI & ML")
        'AI \\\\& ML'
    """
    if text is None:
        return ""
    return text.translate(_ESCAPE_TABLE)


def unescape_latex(latex_str: str) -> str:
    """Reverse escape_latex()."""
    return _UNESCAPE_PATTERN.sub(lambda match: _UNESCAPE_MAP[match.group(0)], latex_str)
