"""
VITA - Validated Input to Typeset Application

Turns structured career data and a photo into a typeset resume PDF.

Architecture:
- Intake Context: Parsing wire/file input into resume data, photo persistence
- Templating Context: Escaping, list block rendering, placeholder substitution
- Rendering Context: LaTeX compilation in isolated working directories
"""

__version__ = "0.1.0"
