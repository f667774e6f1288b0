"""
Template Engine

Fills the bundled LaTeX template with resume data.

Placeholders use the form \\VAR{name} and are replaced in two passes:
scalar fields first, then the pre-rendered list blocks. Each pass is a single
regex scan restricted to that pass's placeholder names, so replacement text is
never scanned again for further placeholders. There are no conditionals or
loops; lists are expanded by the block renderers before substitution.
"""

import os
import re
from pathlib import Path
from typing import Callable, Dict, List, Optional

from dotenv import load_dotenv

from vita.contexts.templating.blocks import (
    render_education_block,
    render_experience_block,
    render_projects_block,
    render_skills_block,
)
from vita.contexts.templating.escaping import escape_latex
from vita.contexts.templating.logger import _log_debug, _log_warning
from vita.contexts.templating.resume_data_structure import ResumeData
from vita.exceptions import TemplateMissingError

load_dotenv()
DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "template" / "resume.tex"
RESUME_TEMPLATE_PATH = Path(os.getenv("RESUME_TEMPLATE_PATH") or DEFAULT_TEMPLATE_PATH)

PLACEHOLDER_PATTERN = re.compile(r"\\VAR\{(\w+)\}")

Resolver = Callable[[ResumeData], str]

# Scalar fields, escaped individually
SCALAR_PLACEHOLDERS: Dict[str, Resolver] = {
    "name": lambda r: escape_latex(r.personal_info.name),
    "title": lambda r: escape_latex(r.personal_info.title),
    "photo_path": lambda r: escape_latex(r.photo_path),
    "phone": lambda r: escape_latex(r.personal_info.phone),
    "email": lambda r: escape_latex(r.personal_info.email),
    "address": lambda r: escape_latex(r.personal_info.address),
    "summary": lambda r: escape_latex(r.personal_info.summary),
}

# List sections, escaped field by field inside the block renderers
BLOCK_PLACEHOLDERS: Dict[str, Resolver] = {
    "skills_block": lambda r: render_skills_block(r.skills),
    "education_block": lambda r: render_education_block(r.education),
    "experience_block": lambda r: render_experience_block(r.experience),
    "projects_block": lambda r: render_projects_block(r.projects),
}


def load_template(template_path: Optional[Path] = None) -> str:
    """
    Read the document template.

    Args:
        template_path: Template file (default: RESUME_TEMPLATE_PATH)

    Returns:
        Template source as text

    Raises:
        TemplateMissingError: If the file does not exist or cannot be read
    """
    template_path = Path(template_path or RESUME_TEMPLATE_PATH)
    try:
        return template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateMissingError(template_path, reason=str(e)) from e


def _substitute(text: str, placeholders: Dict[str, Resolver], resume: ResumeData) -> str:
    """Replace the given placeholders in one scan; unknown names are left untouched."""
    values: Dict[str, str] = {}

    def lookup(match: re.Match) -> str:
        name = match.group(1)
        if name not in placeholders:
            return match.group(0)
        if name not in values:
            values[name] = placeholders[name](resume)
        return values[name]

    return PLACEHOLDER_PATTERN.sub(lookup, text)


def render_template(template_source: str, resume: ResumeData) -> str:
    """
    Produce the complete document source.

    Args:
        template_source: Template text containing \\VAR{...} placeholders
        resume: Input data

    Returns:
        LaTeX document source
    """
    document = _substitute(template_source, SCALAR_PLACEHOLDERS, resume)
    document = _substitute(document, BLOCK_PLACEHOLDERS, resume)

    leftover = find_placeholders(document)
    if leftover:
        _log_warning(f"Unresolved placeholders in template: {', '.join(leftover)}")
    _log_debug(f"Rendered document source ({len(document)} characters)")
    return document


def find_placeholders(text: str) -> List[str]:
    """List placeholder names present in text, in order of first appearance."""
    seen: List[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(text):
        if match.group(1) not in seen:
            seen.append(match.group(1))
    return seen
