"""
End-to-end tests for the generation pipeline.

Uses the fake compiler from conftest.py, plus one real pdflatex run when a
TeX installation is available.
"""

import base64
import io
import shutil
import subprocess
from pathlib import Path

import pytest

from vita.contexts.intake.photo import discard_photo, persist_photo
from vita.contexts.templating.resume_data_structure import (
    ExperienceEntry,
    PersonalInfo,
    ResumeData,
)
from vita.exceptions import CompilationFailedError, ResumeGenerationError, TemplateMissingError
from vita.pipeline import generate_pdf, render_resume
from vita.utils.pdf_processing import page_count

ONE_PIXEL_PNG = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

TEMPLATE_PACKAGES = ["graphicx.sty", "xcolor.sty", "fontawesome5.sty", "enumitem.sty", "hyperref.sty"]


def _latex_package_available(filename: str) -> bool:
    if shutil.which("pdflatex") is None or shutil.which("kpsewhich") is None:
        return False
    result = subprocess.run(["kpsewhich", filename], capture_output=True, text=True)
    return result.returncode == 0 and result.stdout.strip() != ""


PERSONAL_INFO = PersonalInfo(
    name="Jane_Doe",
    title="R&D Lead",
    phone="+49 841 1234",
    email="jane@example.org",
    address="Esplanade 10, Ingolstadt",
    summary="Ships things.",
)


@pytest.mark.integration
def test_render_with_empty_sections():
    """All personal fields set, every list empty."""
    resume = ResumeData(personal_info=PERSONAL_INFO, photo_path="/tmp/photo-1.png")
    document = render_resume(resume)

    assert "Jane\\_Doe" in document
    assert "R\\&D Lead" in document
    assert "\\VAR{" not in document
    assert "\\skill{" not in document
    assert "\\begin{itemize}" not in document
    assert "\\sectiontitle{Skills}\n\n\n\\sectiontitle{Experience}" in document


@pytest.mark.integration
def test_render_experience_bullets():
    resume = ResumeData(
        personal_info=PERSONAL_INFO,
        experience=(
            ExperienceEntry(
                title="Engineer", employer="ACME", period="2021 - 2024", description=("Built X", "Led Y & Z")
            ),
        ),
    )
    document = render_resume(resume)

    bullets = [line.strip() for line in document.splitlines() if line.strip().startswith("\\item")]
    assert bullets == [
        "\\item \\textcolor{graytext}{Built X}",
        "\\item \\textcolor{graytext}{Led Y \\& Z}",
    ]


@pytest.mark.integration
def test_generate_pdf(fake_compiler, temp_area, sample_resume):
    pdf_bytes = generate_pdf(sample_resume, compiler=fake_compiler.path)

    assert pdf_bytes.startswith(b"%PDF-")
    assert b"Ada Lovelace" in pdf_bytes
    assert list(temp_area.iterdir()) == []


@pytest.mark.integration
def test_generate_pdf_compiler_failure(fake_compiler, temp_area, sample_resume, monkeypatch):
    """Compiler exits with status 1: CompilationFailed, working directory gone."""
    monkeypatch.setenv("FAKE_LATEX_MODE", "fail")

    with pytest.raises(CompilationFailedError) as exc_info:
        generate_pdf(sample_resume, compiler=fake_compiler.path)

    assert not exc_info.value.working_dir.exists()
    assert not Path(fake_compiler.record()["out_dir"]).exists()
    assert list(temp_area.iterdir()) == []


@pytest.mark.integration
def test_generate_pdf_template_missing(fake_compiler, temp_area, sample_resume, tmp_path):
    with pytest.raises(TemplateMissingError):
        generate_pdf(sample_resume, template_path=tmp_path / "gone.tex", compiler=fake_compiler.path)

    # The compiler never ran
    assert not fake_compiler.record_file.exists()
    assert list(temp_area.iterdir()) == []


@pytest.mark.integration
def test_generate_pdf_custom_template(fake_compiler, temp_area, sample_resume, tmp_path):
    template = tmp_path / "minimal.tex"
    template.write_text("Name: \\VAR{name}\n\\VAR{skills_block}\n", encoding="utf-8")

    pdf_bytes = generate_pdf(sample_resume, template_path=template, compiler=fake_compiler.path)

    assert b"Name: Ada Lovelace\n\\skill{Python}\n\\skill{C\\#}" in pdf_bytes


@pytest.mark.integration
def test_failures_are_logged(fake_compiler, temp_area, sample_resume, monkeypatch, log_messages):
    monkeypatch.setenv("FAKE_LATEX_MODE", "nopdf")

    with pytest.raises(ResumeGenerationError):
        generate_pdf(sample_resume, compiler=fake_compiler.path)

    assert any("[pipeline] OutputMissing" in m for m in log_messages)


@pytest.mark.integration
@pytest.mark.latex
@pytest.mark.skipif(
    not all(_latex_package_available(p) for p in TEMPLATE_PACKAGES),
    reason="pdflatex or a package used by the bundled template is not installed",
)
def test_generate_pdf_with_real_pdflatex(sample_resume):
    """Full compile of the bundled template. Needs graphicx, xcolor, fontawesome5, enumitem."""
    photo_path = persist_photo(io.BytesIO(base64.b64decode(ONE_PIXEL_PNG)), "pixel.png")
    try:
        pdf_bytes = generate_pdf(sample_resume.with_photo(str(photo_path)), compiler="pdflatex")
    finally:
        discard_photo(photo_path)

    assert pdf_bytes.startswith(b"%PDF-")
    assert page_count(pdf_bytes) >= 1
