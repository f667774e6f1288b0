"""
List Block Rendering

Turns ordered lists of resume entries into LaTeX fragments that replace the
block placeholders of the document template. Every user-supplied field is
escaped on its own before it is placed into the markup skeleton.
"""

from typing import Iterable, List, Optional, Sequence

from vita.contexts.templating.escaping import escape_latex
from vita.contexts.templating.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    ProjectExperienceEntry,
)

TECHNOLOGIES_LABEL = "Technologies"
PROJECT_LINK_TEXT = "Project on GitHub"


def _entry_header(title: Optional[str], period: Optional[str] = None) -> str:
    """Bold title with the period right-aligned; both are escaped here."""
    return (
        f"\\textbf{{\\textcolor{{graytext}}{{{escape_latex(title)}}}}}"
        f"\\hfill {escape_latex(period)}\\\\\n"
    )


def _itemize(bullets: Iterable[str]) -> str:
    """Wrap already escaped bullet contents in an itemize environment."""
    lines = ["\\begin{itemize}\n"]
    for bullet in bullets:
        lines.append(f"    \\item {bullet}\n")
    lines.append("\\end{itemize}\n")
    return "".join(lines)


def _gray(text: str) -> str:
    return f"\\textcolor{{graytext}}{{{escape_latex(text)}}}"


def _entry_footer() -> str:
    return "\\vspace{4mm}\n\n"


def render_skills_block(skills: Sequence[str]) -> str:
    """
    Render skills as one \\skill{...} item per line.

    Args:
        skills: Skill names in display order

    Returns:
        LaTeX fragment ("" for an empty list)
    """
    return "\n".join(f"\\skill{{{escape_latex(skill)}}}" for skill in skills)


def render_education_block(entries: Sequence[EducationEntry]) -> str:
    """
    Render education entries.

    Each entry gets a bold title with right-aligned period, an italic
    institution line, and a single bullet holding the description.
    """
    parts: List[str] = []
    for entry in entries:
        parts.append(_entry_header(entry.title, entry.period))
        parts.append(f"\\textit{{{escape_latex(entry.institution)}}}\\\\[2mm]\n")
        parts.append(_itemize([_gray(entry.description)]))
        parts.append(_entry_footer())
    return "".join(parts)


def render_experience_block(entries: Sequence[ExperienceEntry]) -> str:
    """
    Render work experience entries with one bullet per description line.

    An entry without description lines renders an empty itemize body.
    """
    parts: List[str] = []
    for entry in entries:
        parts.append(_entry_header(entry.title, entry.period))
        parts.append(f"\\textit{{{escape_latex(entry.employer)}}}\\\\[2mm]\n")
        parts.append(_itemize(_gray(line) for line in entry.description))
        parts.append(_entry_footer())
    return "".join(parts)


def _has_link(entry: ProjectExperienceEntry) -> bool:
    return entry.link is not None and entry.link.strip() != ""


def render_projects_block(entries: Sequence[ProjectExperienceEntry]) -> str:
    """
    Render project entries.

    Projects carry no period. When an entry has a non-blank link, a trailing
    bullet with a GitHub icon and a hyperlink to it is added; entries without
    a link get no extra bullet.
    """
    parts: List[str] = []
    for entry in entries:
        parts.append(_entry_header(entry.title))
        parts.append(
            f"\\textit{{\\textcolor{{graytext}}{{{TECHNOLOGIES_LABEL}: "
            f"{escape_latex(entry.technologies)}}}}}\\\\[2mm]\n"
        )

        bullets = [_gray(line) for line in entry.description]
        if _has_link(entry):
            bullets.append(f"\\faGithub\\ \\href{{{escape_latex(entry.link)}}}{{{PROJECT_LINK_TEXT}}}")
        parts.append(_itemize(bullets))
        parts.append(_entry_footer())
    return "".join(parts)
