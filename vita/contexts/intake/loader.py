"""
Resume input loading.

Files are read with OmegaConf, which accepts YAML and therefore JSON as well.
"""

import json
from pathlib import Path
from typing import Optional

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from yaml import YAMLError

from vita.contexts.intake.logger import _log_debug
from vita.contexts.templating.resume_data_structure import ResumeData, resume_from_dict
from vita.exceptions import InvalidResumeDataError


def load_resume_file(path: Path, photo_path: Optional[Path] = None) -> ResumeData:
    """
    Load a resume input file.

    Args:
        path: YAML or JSON file with the resume structure
        photo_path: Photo to use instead of the file's photo_path entry.
                    Relative photo paths in the file are resolved against the
                    file's directory.

    Returns:
        ResumeData

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidResumeDataError: If the file is not a valid resume document
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Resume file not found: {path}")

    try:
        conf = OmegaConf.load(path)
    except (YAMLError, OmegaConfBaseException) as e:
        raise InvalidResumeDataError(f"Could not parse {path}: {e}") from e

    data = OmegaConf.to_container(conf, resolve=True)
    resume = resume_from_dict(data)
    _log_debug(f"Loaded resume input from {path}")

    if photo_path is not None:
        return resume.with_photo(str(Path(photo_path).resolve()))
    if resume.photo_path and not Path(resume.photo_path).is_absolute():
        return resume.with_photo(str((path.parent / resume.photo_path).resolve()))
    return resume


def parse_resume_json(payload: str) -> ResumeData:
    """
    Parse the JSON payload of a generate request.

    Raises:
        InvalidResumeDataError: If the payload is not JSON or has the wrong shape
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise InvalidResumeDataError(f"Invalid JSON payload: {e}") from e
    return resume_from_dict(data)
