"""
LaTeX Compilation Module

Compiles document source to PDF bytes with pdflatex (or a compatible compiler).

Each call owns a freshly created working directory under the system temp area.
The directory is removed when the call returns, whatever the outcome.
"""

import os
import re
import shutil
import subprocess
import tempfile
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from dotenv import load_dotenv

from vita.contexts.rendering.logger import (
    _log_debug,
    _log_error,
    _log_warning,
    log_compilation_failure,
    log_compilation_start,
    log_compilation_success,
)
from vita.exceptions import (
    CompilationFailedError,
    CompilationTimeoutError,
    DocumentIOError,
    OutputMissingError,
)
from vita.utils.pdf_processing import page_count

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
# Seconds; 0 disables the timeout. Parsed per call by _default_timeout()
DEFAULT_TIMEOUT_S = 120.0
LATEX_TIMEOUT_S = os.getenv("LATEX_TIMEOUT_S", str(DEFAULT_TIMEOUT_S))

WORKING_DIR_PREFIX = "resume-"
TEX_FILENAME = "resume.tex"
PDF_FILENAME = "resume.pdf"
LOG_FILENAME = "resume.log"


def _parse_latex_log(log_content: str) -> List[str]:
    """
    Parse LaTeX log file for errors.

    Args:
        log_content: Content of the .log file

    Returns:
        List of error messages, in log order
    """
    errors = []

    # LaTeX error pattern: "! Error message"
    error_pattern = re.compile(r"^! (.+)$", re.MULTILINE)
    for match in error_pattern.finditer(log_content):
        errors.append(match.group(1).strip())

    # Additional error patterns that don't start with "!"
    additional_error_patterns = [
        r"Undefined control sequence",
        r"File ended while scanning use of",
        r"Emergency stop",
    ]
    for pattern in additional_error_patterns:
        match = re.search(rf"({pattern}.*?)$", log_content, re.MULTILINE)
        if match and match.group(1) not in errors:
            errors.append(match.group(1))

    return errors


def _read_compiler_errors(working_dir: Path) -> List[str]:
    """Collect errors from the compiler log before the working directory goes away."""
    log_file = working_dir / LOG_FILENAME
    if not log_file.exists():
        return []

    # pdflatex writes log files in latin-1 encoding (font metadata contains non-UTF-8)
    try:
        log_content = log_file.read_text(encoding="latin-1")
    except OSError as e:
        _log_warning(f"Could not read compiler log {log_file}: {e}")
        return []
    return _parse_latex_log(log_content)


def _default_timeout() -> float:
    """Timeout from LATEX_TIMEOUT_S, falling back to the default when malformed."""
    try:
        timeout = float(LATEX_TIMEOUT_S)
    except (TypeError, ValueError):
        _log_warning(
            f"Ignoring invalid LATEX_TIMEOUT_S={LATEX_TIMEOUT_S!r}, using {DEFAULT_TIMEOUT_S}s"
        )
        return DEFAULT_TIMEOUT_S
    if timeout < 0:
        _log_warning(f"Ignoring negative LATEX_TIMEOUT_S={LATEX_TIMEOUT_S!r}, using {DEFAULT_TIMEOUT_S}s")
        return DEFAULT_TIMEOUT_S
    return timeout


def _remove_working_directory(working_dir: Path) -> None:
    """Recursively delete a working directory, logging instead of raising on failure."""
    try:
        shutil.rmtree(working_dir)
        _log_debug(f"Removed working directory {working_dir}")
    except OSError as e:
        _log_warning(f"Failed to clean up temporary directory {working_dir}: {e}")


@contextmanager
def working_directory(prefix: str = WORKING_DIR_PREFIX) -> Iterator[Path]:
    """
    Create a uniquely named directory and remove it on exit.

    The name comes from tempfile.mkdtemp, which creates the directory
    atomically, so concurrent callers never share one.

    Args:
        prefix: Directory name prefix

    Yields:
        Path to the new, empty directory

    Raises:
        DocumentIOError: If the directory cannot be created
    """
    try:
        working_dir = Path(tempfile.mkdtemp(prefix=prefix))
    except OSError as e:
        raise DocumentIOError(f"Could not create working directory: {e}") from e

    _log_debug(f"Created working directory {working_dir}")
    try:
        yield working_dir
    finally:
        _remove_working_directory(working_dir)


def _run_compiler(
    compiler: str, tex_file: Path, working_dir: Path, timeout: Optional[float]
) -> int:
    """
    Run the compiler once and return its exit status.

    stdout/stderr are inherited from this process so compiler diagnostics show
    up in the operator's console.
    """
    cmd = [
        compiler,
        "-interaction=nonstopmode",
        f"-output-directory={working_dir}",
        str(tex_file),
    ]
    _log_debug(f"  Command: {' '.join(cmd)}")

    try:
        completed = subprocess.run(
            cmd,
            cwd=working_dir,
            stdin=subprocess.DEVNULL,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        # subprocess.run has already killed and reaped the child
        raise CompilationTimeoutError(working_dir, timeout) from e
    except FileNotFoundError as e:
        raise DocumentIOError(f"LaTeX compiler not found: {compiler}", path=Path(compiler)) from e
    except OSError as e:
        raise DocumentIOError(f"Could not launch LaTeX compiler {compiler}: {e}") from e

    return completed.returncode


def compile_document(
    document_source: str,
    compiler: Optional[str] = None,
    timeout: Optional[float] = None,
) -> bytes:
    """
    Compile LaTeX source to PDF bytes.

    Writes the source as resume.tex into a fresh working directory, runs the
    compiler in batch mode with its output directed there, and reads back
    resume.pdf. The working directory is deleted on every exit path.

    Args:
        document_source: Complete LaTeX document
        compiler: Compiler executable (default: LATEX_COMPILER env, "pdflatex")
        timeout: Seconds before the compiler is killed
                 (default: LATEX_TIMEOUT_S env; 0 disables)

    Returns:
        Contents of the produced PDF

    Raises:
        CompilationFailedError: Compiler exited with non-zero status
        CompilationTimeoutError: Compiler exceeded the timeout
        OutputMissingError: Compiler succeeded but no PDF was written
        DocumentIOError: Filesystem or process launch failure
    """
    compiler = compiler or LATEX_COMPILER
    if timeout is None:
        timeout = _default_timeout()
    timeout = timeout or None

    with working_directory() as working_dir:
        tex_file = working_dir / TEX_FILENAME
        # UnicodeError: lone surrogates from JSON have no UTF-8 encoding
        try:
            tex_file.write_text(document_source, encoding="utf-8")
        except (OSError, UnicodeError) as e:
            raise DocumentIOError(f"Could not write {tex_file}: {e}", path=tex_file) from e

        log_compilation_start(compiler, working_dir, timeout)
        start_time = time.time()

        try:
            returncode = _run_compiler(compiler, tex_file, working_dir, timeout)
        except CompilationTimeoutError:
            _log_error(f"Compiler killed after {timeout}s timeout")
            raise

        compilation_time_s = time.time() - start_time

        if returncode != 0:
            errors = _read_compiler_errors(working_dir)
            log_compilation_failure(returncode, errors, compilation_time_s)
            raise CompilationFailedError(working_dir, returncode=returncode, errors=errors)

        pdf_file = working_dir / PDF_FILENAME
        try:
            pdf_bytes = pdf_file.read_bytes()
        except FileNotFoundError as e:
            _log_error(f"Compiler exited cleanly but {PDF_FILENAME} is missing")
            raise OutputMissingError(pdf_file) from e
        except OSError as e:
            raise DocumentIOError(f"Could not read {pdf_file}: {e}", path=pdf_file) from e

        log_compilation_success(len(pdf_bytes), page_count(pdf_bytes), compilation_time_s)
        return pdf_bytes
