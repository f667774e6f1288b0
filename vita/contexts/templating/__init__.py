"""
Templating Context

Responsibilities:
- Represents resume input as immutable data structures
- Escapes user text for LaTeX
- Renders list sections (skills, education, experience, projects) into LaTeX blocks
- Loads the bundled document template and substitutes its placeholders

Owns: Resume data model, LaTeX escaping, document source generation
Never: Runs the compiler or touches working directories
"""

from vita.contexts.templating.blocks import (
    render_education_block,
    render_experience_block,
    render_projects_block,
    render_skills_block,
)
from vita.contexts.templating.escaping import escape_latex, unescape_latex
from vita.contexts.templating.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ProjectExperienceEntry,
    ResumeData,
    resume_from_dict,
)
from vita.contexts.templating.template_engine import (
    BLOCK_PLACEHOLDERS,
    SCALAR_PLACEHOLDERS,
    find_placeholders,
    load_template,
    render_template,
)

__all__ = [
    # Data structures
    "PersonalInfo",
    "EducationEntry",
    "ExperienceEntry",
    "ProjectExperienceEntry",
    "ResumeData",
    "resume_from_dict",
    # Escaping
    "escape_latex",
    "unescape_latex",
    # Block rendering
    "render_skills_block",
    "render_education_block",
    "render_experience_block",
    "render_projects_block",
    # Template engine
    "SCALAR_PLACEHOLDERS",
    "BLOCK_PLACEHOLDERS",
    "find_placeholders",
    "load_template",
    "render_template",
]
