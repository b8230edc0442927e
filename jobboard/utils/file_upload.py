"""
File Upload Utility - Validate uploaded resume files.

Supported formats (images only):
- PNG  (image/png)
- JPEG (image/jpeg)
- WebP (image/webp)

Max file size: settings.max_resume_size_mb
"""

from typing import Optional, Tuple

from fastapi import UploadFile

from jobboard.core.errors import BadRequestError

# content type -> stored file extension
ALLOWED_CONTENT_TYPES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
}


def resume_extension(content_type: Optional[str]) -> str:
    """
    Map an upload's content type to the extension it is stored with.

    Raises:
        BadRequestError if the type is not an accepted image format
    """
    ext = ALLOWED_CONTENT_TYPES.get((content_type or "").split(";")[0].strip().lower())
    if ext is None:
        raise BadRequestError("Invalid file type. Please upload a PNG, JPEG or WEBP file.")
    return ext


def read_resume(file: Optional[UploadFile], max_size_mb: int) -> Tuple[bytes, str]:
    """
    Check and read an uploaded resume.

    Args:
        file: FastAPI UploadFile (None if the form had no resume part)
        max_size_mb: upper bound on the file size

    Returns:
        Tuple of (content, extension)

    Raises:
        BadRequestError on missing, empty, oversized or wrongly typed files
    """
    if file is None or not file.filename:
        raise BadRequestError("Resume File Required!")

    ext = resume_extension(file.content_type)

    limit = max_size_mb * 1024 * 1024
    # one byte past the limit is enough to know the file is too large
    content = file.file.read(limit + 1)
    if not content:
        raise BadRequestError("Resume File Required!")
    if len(content) > limit:
        raise BadRequestError(f"File too large. Maximum size: {max_size_mb}MB")

    return content, ext
