"""
Shared utilities for VITA.

Common functionality used across contexts:
- Logger configuration
- PDF inspection
"""

from vita.utils.logger import setup_logger
from vita.utils.pdf_processing import page_count

__all__ = ["page_count", "setup_logger"]
