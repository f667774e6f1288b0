"""
Error taxonomy for resume generation.

Every failure the pipeline can surface is a ResumeGenerationError carrying a
`kind` tag that transport layers map to a response.
"""

from pathlib import Path
from typing import List, Optional


class ResumeGenerationError(Exception):
    """Base class for all pipeline failures."""

    kind = "ResumeGenerationError"


class TemplateMissingError(ResumeGenerationError):
    """
    Raised when the document template asset cannot be located or read.

    Attributes:
        template_path: Path that was looked up
    """

    kind = "TemplateMissing"

    def __init__(self, template_path: Path, reason: Optional[str] = None):
        self.template_path = template_path
        message = f"Template not found: {template_path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class CompilationFailedError(ResumeGenerationError):
    """
    Raised when the LaTeX compiler exits with a non-zero status.

    Attributes:
        working_dir: Directory the compilation ran in (already removed when caught)
        returncode: Exit status of the compiler process
        errors: LaTeX errors parsed from the compiler log before cleanup
    """

    kind = "CompilationFailed"

    def __init__(
        self,
        working_dir: Path,
        returncode: Optional[int] = None,
        errors: Optional[List[str]] = None,
        message: Optional[str] = None,
    ):
        self.working_dir = working_dir
        self.returncode = returncode
        self.errors = list(errors or [])

        if message is None:
            message = f"LaTeX compilation failed (exit status {returncode}). Check logs in {working_dir}"
        super().__init__(message)


class CompilationTimeoutError(CompilationFailedError):
    """Raised when the compiler was killed after exceeding its time limit."""

    def __init__(self, working_dir: Path, timeout: float):
        self.timeout = timeout
        super().__init__(
            working_dir,
            message=f"LaTeX compilation timed out after {timeout}s in {working_dir}",
        )


class OutputMissingError(ResumeGenerationError):
    """Raised when the compiler reported success but produced no PDF."""

    kind = "OutputMissing"

    def __init__(self, expected_path: Path):
        self.expected_path = expected_path
        super().__init__(f"Compiler exited cleanly but no PDF was produced at {expected_path}")


class DocumentIOError(ResumeGenerationError):
    """
    Raised when creating the working directory, writing the source, launching
    the compiler or reading the artifact fails at the filesystem level.
    """

    kind = "IOFailure"

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


class InvalidResumeDataError(ValueError):
    """
    Raised when input data does not match the expected resume structure.

    Not part of the generation taxonomy: it is raised before the pipeline runs.
    """

    pass
