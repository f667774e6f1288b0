"""
Rendering Context

Responsibilities:
- Compiles LaTeX document source to PDF bytes
- Owns the per-call working directory and its cleanup
- Surfaces compiler failures with diagnostic information

Owns: LaTeX compilation, working directories, compiler process lifecycle
Never: Modifies document content
"""

from vita.contexts.rendering.compiler import compile_document, working_directory

__all__ = ["compile_document", "working_directory"]
