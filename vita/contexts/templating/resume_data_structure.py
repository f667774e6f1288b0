"""
Resume Data Structures

Immutable value types for the input of the generation pipeline, plus the
conversion from plain containers (parsed JSON/YAML) into those types.
"""

from dataclasses import dataclass, field, replace
from typing import Any, List, Mapping, Optional, Tuple

from vita.exceptions import InvalidResumeDataError


@dataclass(frozen=True)
class PersonalInfo:
    """
    Header fields of the resume.

    All fields are optional; absent values render as empty text.
    """

    name: Optional[str] = None
    title: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    summary: Optional[str] = None


@dataclass(frozen=True)
class EducationEntry:
    """
    Single education entry.

    Attributes:
        title: Degree or programme
        institution: University or school
        period: Free-form date range (e.g., "2019 - 2023")
        description: One block of text, rendered as a single bullet
    """

    title: Optional[str] = None
    institution: Optional[str] = None
    period: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class ExperienceEntry:
    """
    Single work experience entry.

    Attributes:
        title: Job title
        employer: Company name
        period: Free-form date range
        description: Bullet lines, in display order
    """

    title: Optional[str] = None
    employer: Optional[str] = None
    period: Optional[str] = None
    description: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProjectExperienceEntry:
    """
    Single project entry.

    Attributes:
        title: Project name
        technologies: Technologies used, as one line of text
        link: Optional repository URL, rendered as an extra bullet when non-blank
        description: Bullet lines, in display order
    """

    title: Optional[str] = None
    technologies: Optional[str] = None
    link: Optional[str] = None
    description: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ResumeData:
    """
    Complete input of one generation run.

    Attributes:
        personal_info: Header fields
        skills: Skill names, in display order
        education: Education entries, in display order
        experience: Work experience entries, in display order
        projects: Project entries, in display order
        photo_path: Filesystem path of an already persisted photo
    """

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    skills: Tuple[str, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    experience: Tuple[ExperienceEntry, ...] = ()
    projects: Tuple[ProjectExperienceEntry, ...] = ()
    photo_path: Optional[str] = None

    def with_photo(self, photo_path: str) -> "ResumeData":
        """Return a copy pointing at a different photo."""
        return replace(self, photo_path=photo_path)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise InvalidResumeDataError(f"'{where}' must be a mapping, got {type(value).__name__}")
    return value


def _sequence(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise InvalidResumeDataError(f"'{where}' must be a list, got {type(value).__name__}")
    return list(value)


def _lines(value: Any, where: str) -> Tuple[str, ...]:
    return tuple(_optional_str(line) or "" for line in _sequence(value, where))


def resume_from_dict(data: Mapping[str, Any]) -> ResumeData:
    """
    Build ResumeData from plain containers.

    Expected structure (all keys optional):

        personal_info: {name, title, phone, email, address, summary}
        skills: [str, ...]
        education: [{title, institution, period, description}, ...]
        experience: [{title, employer, period, description: [str, ...]}, ...]
        projects: [{title, technologies, link, description: [str, ...]}, ...]
        photo_path: str

    Args:
        data: Parsed JSON/YAML document

    Returns:
        ResumeData with list order preserved

    Raises:
        InvalidResumeDataError: If a container has the wrong shape
    """
    data = _mapping(data, "resume")

    info = _mapping(data.get("personal_info"), "personal_info")
    personal_info = PersonalInfo(
        name=_optional_str(info.get("name")),
        title=_optional_str(info.get("title")),
        phone=_optional_str(info.get("phone")),
        email=_optional_str(info.get("email")),
        address=_optional_str(info.get("address")),
        summary=_optional_str(info.get("summary")),
    )

    education = []
    for i, raw in enumerate(_sequence(data.get("education"), "education")):
        entry = _mapping(raw, f"education[{i}]")
        education.append(
            EducationEntry(
                title=_optional_str(entry.get("title")),
                institution=_optional_str(entry.get("institution")),
                period=_optional_str(entry.get("period")),
                description=_optional_str(entry.get("description")),
            )
        )

    experience = []
    for i, raw in enumerate(_sequence(data.get("experience"), "experience")):
        entry = _mapping(raw, f"experience[{i}]")
        experience.append(
            ExperienceEntry(
                title=_optional_str(entry.get("title")),
                employer=_optional_str(entry.get("employer")),
                period=_optional_str(entry.get("period")),
                description=_lines(entry.get("description"), f"experience[{i}].description"),
            )
        )

    projects = []
    for i, raw in enumerate(_sequence(data.get("projects"), "projects")):
        entry = _mapping(raw, f"projects[{i}]")
        projects.append(
            ProjectExperienceEntry(
                title=_optional_str(entry.get("title")),
                technologies=_optional_str(entry.get("technologies")),
                link=_optional_str(entry.get("link")),
                description=_lines(entry.get("description"), f"projects[{i}].description"),
            )
        )

    return ResumeData(
        personal_info=personal_info,
        skills=_lines(data.get("skills"), "skills"),
        education=tuple(education),
        experience=tuple(experience),
        projects=tuple(projects),
        photo_path=_optional_str(data.get("photo_path")),
    )
