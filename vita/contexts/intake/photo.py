"""
Photo persistence for uploaded images.

Uploaded photos are copied to a uniquely named file in the system temp area so
the document template can reference them by path. The name is built from a
uuid hex string (no characters LaTeX would need escaped) and keeps the
original extension, which \\includegraphics uses to pick the image driver.
"""

import shutil
import tempfile
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

from vita.contexts.intake.logger import _log_debug, _log_error, _log_info, _log_warning
from vita.exceptions import InvalidResumeDataError

ALLOWED_PHOTO_EXTENSIONS = {".jpg", ".jpeg", ".png", ".pdf"}


def photo_extension(filename: Optional[str]) -> str:
    """
    Return the lower-cased extension of an uploaded file name.

    Raises:
        InvalidResumeDataError: If the extension is missing or not an image type
    """
    suffix = Path(filename or "").suffix.lower()
    if suffix not in ALLOWED_PHOTO_EXTENSIONS:
        raise InvalidResumeDataError(
            f"Unsupported photo file '{filename}'. "
            f"Allowed extensions: {', '.join(sorted(ALLOWED_PHOTO_EXTENSIONS))}"
        )
    return suffix


def persist_photo(stream: BinaryIO, filename: Optional[str], directory: Optional[Path] = None) -> Path:
    """
    Copy an uploaded photo to a new temp file.

    Args:
        stream: Readable binary stream with the image data
        filename: Original file name (used for the extension only)
        directory: Target directory (default: system temp directory)

    Returns:
        Absolute path of the persisted photo
    """
    extension = photo_extension(filename)
    directory = Path(directory or tempfile.gettempdir())
    photo_path = (directory / f"photo-{uuid.uuid4().hex}{extension}").resolve()

    # "xb" fails instead of overwriting if the name is somehow taken
    with open(photo_path, "xb") as f:
        try:
            shutil.copyfileobj(stream, f)
        except BaseException:
            # The caller never receives the path on failure
            _log_warning(f"Upload interrupted, removing partial photo: {photo_path}")
            photo_path.unlink(missing_ok=True)
            raise

    _log_info(f"Uploaded photo saved to: {photo_path}")
    return photo_path


def discard_photo(photo_path: Optional[Path]) -> None:
    """Delete a persisted photo; failures are logged, not raised."""
    if photo_path is None:
        return
    try:
        Path(photo_path).unlink(missing_ok=True)
        _log_debug(f"Cleaned up temporary photo: {photo_path}")
    except OSError as e:
        _log_error(f"Failed to delete temporary photo {photo_path}: {e}")
