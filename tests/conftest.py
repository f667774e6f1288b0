"""Shared fixtures: a fake LaTeX compiler, an isolated temp area and log capture."""

import json
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List

import pytest
from loguru import logger

from vita.contexts.templating.resume_data_structure import (
    EducationEntry,
    ExperienceEntry,
    PersonalInfo,
    ProjectExperienceEntry,
    ResumeData,
)


# Honours the pdflatex command line used by the compiler module:
#   <compiler> -interaction=nonstopmode -output-directory=<dir> <dir>/resume.tex
# Behaviour is selected with FAKE_LATEX_MODE: ok | fail | nopdf | sleep
FAKE_COMPILER_SOURCE = """#!__PYTHON__
import json
import os
import sys
import time
from pathlib import Path

args = sys.argv[1:]
out_dir = Path([a.split("=", 1)[1] for a in args if a.startswith("-output-directory=")][0])
tex_file = Path(args[-1])

record = os.environ.get("FAKE_LATEX_RECORD")
if record:
    Path(record).write_text(json.dumps({"args": args, "cwd": os.getcwd(), "out_dir": str(out_dir)}))

mode = os.environ.get("FAKE_LATEX_MODE", "ok")
if mode == "fail":
    (out_dir / (tex_file.stem + ".log")).write_text(
        "This is a fake TeX log\\n! Undefined control sequence.\\nl.12 \\\\foo\\n", encoding="latin-1"
    )
    sys.exit(1)
if mode == "nopdf":
    sys.exit(0)
if mode == "sleep":
    time.sleep(30)

(out_dir / (tex_file.stem + ".pdf")).write_bytes(b"%PDF-1.4\\n" + tex_file.read_bytes())
"""


@dataclass
class FakeCompiler:
    path: str
    record_file: Path

    def record(self) -> dict:
        """Arguments and directories seen by the last invocation."""
        return json.loads(self.record_file.read_text())


@pytest.fixture
def fake_compiler(tmp_path, monkeypatch) -> FakeCompiler:
    script = tmp_path / "fake-latex"
    script.write_text(FAKE_COMPILER_SOURCE.replace("__PYTHON__", sys.executable))
    script.chmod(0o755)

    record_file = tmp_path / "invocation.json"
    monkeypatch.setenv("FAKE_LATEX_RECORD", str(record_file))
    monkeypatch.setenv("FAKE_LATEX_MODE", "ok")
    return FakeCompiler(path=str(script), record_file=record_file)


@pytest.fixture
def temp_area(tmp_path, monkeypatch) -> Path:
    """Redirect tempfile to an empty directory so leftovers can be detected."""
    area = tmp_path / "tmp"
    area.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(area))
    return area


@pytest.fixture
def log_messages() -> List[str]:
    messages: List[str] = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def sample_resume() -> ResumeData:
    return ResumeData(
        personal_info=PersonalInfo(
            name="Ada Lovelace",
            title="Analytical Engine Programmer",
            phone="+44 20 7946 0000",
            email="ada_lovelace@example.org",
            address="12 St James's Square, London",
            summary="Writes programs for machines that do not exist yet & enjoys it 100%.",
        ),
        skills=("Python", "C#", "Numerical Analysis"),
        education=(
            EducationEntry(
                title="Private tutoring in mathematics",
                institution="University of London",
                period="1829 - 1833",
                description="Calculus, logic and the {difference engine}",
            ),
        ),
        experience=(
            ExperienceEntry(
                title="Translator",
                employer="Taylor's Scientific Memoirs",
                period="1842 - 1843",
                description=("Built X", "Led Y & Z"),
            ),
        ),
        projects=(
            ProjectExperienceEntry(
                title="Bernoulli numbers",
                technologies="Analytical Engine, Note_G",
                link="https://github.com/ada/note-g",
                description=("First published algorithm",),
            ),
        ),
        photo_path="/tmp/photo-0123abcd.jpg",
    )
