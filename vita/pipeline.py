"""
Resume generation pipeline.

Sequences template loading, placeholder substitution and compilation:

    ResumeData -> render_resume() -> document source -> compile_document() -> PDF bytes

Any failure propagates as a ResumeGenerationError subclass. Nothing is retried:
the pipeline is deterministic, so an identical input reproduces the failure.
"""

import time
from pathlib import Path
from typing import Optional

from loguru import logger

from vita.contexts.rendering.compiler import compile_document
from vita.contexts.templating.resume_data_structure import ResumeData
from vita.contexts.templating.template_engine import load_template, render_template
from vita.exceptions import ResumeGenerationError

CONTEXT_PREFIX = "[pipeline]"


def render_resume(resume: ResumeData, template_path: Optional[Path] = None) -> str:
    """
    Render the LaTeX document source for a resume without compiling it.

    Args:
        resume: Input data
        template_path: Template file (default: bundled template)

    Returns:
        LaTeX document source

    Raises:
        TemplateMissingError: If the template cannot be read
    """
    template_source = load_template(template_path)
    return render_template(template_source, resume)


def generate_pdf(
    resume: ResumeData,
    template_path: Optional[Path] = None,
    compiler: Optional[str] = None,
    timeout: Optional[float] = None,
) -> bytes:
    """
    Generate the resume PDF.

    Args:
        resume: Input data, with photo_path pointing at a persisted image
        template_path: Template file (default: bundled template)
        compiler: LaTeX compiler executable (default: LATEX_COMPILER env)
        timeout: Compiler timeout in seconds (default: LATEX_TIMEOUT_S env)

    Returns:
        PDF bytes

    Raises:
        ResumeGenerationError: TemplateMissing, CompilationFailed, OutputMissing or IOFailure
    """
    name = resume.personal_info.name or "<unnamed>"
    logger.info(f"{CONTEXT_PREFIX} Generating resume for {name}")
    start_time = time.time()

    try:
        document_source = render_resume(resume, template_path)
        pdf_bytes = compile_document(document_source, compiler=compiler, timeout=timeout)
    except ResumeGenerationError as e:
        logger.error(f"{CONTEXT_PREFIX} {e.kind}: {e} ({time.time() - start_time:.2f}s)")
        raise

    logger.success(f"{CONTEXT_PREFIX} Resume generated ({time.time() - start_time:.2f}s)")
    return pdf_bytes
