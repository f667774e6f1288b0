"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from pathlib import Path
from typing import List, Optional

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_compilation_start(compiler: str, working_dir: Path, timeout: Optional[float]) -> None:
    """Log start of compilation with context."""
    _log_info(f"Compiling in {working_dir}")
    _log_debug(f"  Compiler: {compiler}")
    _log_debug(f"  Timeout: {timeout if timeout else 'none'}")


def log_compilation_success(pdf_size: int, page_count: Optional[int], elapsed_time: float) -> None:
    """Log a successful compilation."""
    pages = f"{page_count} pages, " if page_count is not None else ""
    _log_success(f"Compilation succeeded ({pages}{pdf_size} bytes, {elapsed_time:.2f}s)")


def log_compilation_failure(
    returncode: Optional[int], errors: List[str], elapsed_time: float, error_limit: int = 5
) -> None:
    """
    Log a failed compilation with parsed LaTeX errors.

    Args:
        returncode: Compiler exit status (None if it never finished)
        errors: Errors parsed from the compiler log
        elapsed_time: Time taken to compile
        error_limit: Maximum number of errors to list
    """
    _log_error(f"Compilation failed: exit status {returncode}, {len(errors)} errors ({elapsed_time:.2f}s)")
    for i, err in enumerate(errors[:error_limit], 1):
        _log_error(f"  Error {i}: {err}")
    if len(errors) > error_limit:
        _log_error(f"  ... and {len(errors) - error_limit} more errors")
