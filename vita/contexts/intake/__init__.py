"""
Intake Context

Responsibilities:
- Loads resume input files (YAML or JSON) into ResumeData
- Parses JSON payloads from the HTTP transport
- Persists uploaded photos to uniquely named temp files and discards them

Owns: Input parsing, photo files
Never: Renders or compiles documents
"""

from vita.contexts.intake.loader import load_resume_file, parse_resume_json
from vita.contexts.intake.photo import discard_photo, persist_photo

__all__ = ["discard_photo", "load_resume_file", "parse_resume_json", "persist_photo"]
