# recruiting/uploads.py
"""
CV attachment checks for public applications.

The attachment is a Django UploadedFile (or anything exposing ``name``,
``content_type`` and ``size``). Its content is never read or kept: the
candidate stores only the original file name, the declared content type
and an opaque reference string.
"""

import os
import uuid

from django.conf import settings


class AttachmentError(Exception):
    """Base class for CV attachment problems."""


class MissingAttachment(AttachmentError):
    """No file was provided, or the file is empty."""


class UnsupportedFileType(AttachmentError):
    """The declared content type is not one of settings.CV_ALLOWED_CONTENT_TYPES."""

    def __init__(self, content_type: str):
        self.content_type = content_type
        super().__init__(f"Unsupported file type: {content_type or 'unknown'}.")


class AttachmentTooLarge(AttachmentError):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"File is too large ({size} bytes, limit {limit}).")


def validate_cv_file(cv_file) -> None:
    """
    Raise an AttachmentError unless cv_file is an acceptable CV.

    Raises:
        MissingAttachment: No file, or a zero-byte file
        UnsupportedFileType: Declared type not allowed (pdf, doc, docx, plain text)
        AttachmentTooLarge: Larger than settings.CV_MAX_UPLOAD_SIZE
    """
    if cv_file is None or not getattr(cv_file, "name", ""):
        raise MissingAttachment("A CV attachment is required.")

    size = getattr(cv_file, "size", None)
    if size is not None and size <= 0:
        raise MissingAttachment("The CV attachment is empty.")

    content_type = (getattr(cv_file, "content_type", "") or "").split(";")[0].strip().lower()
    if content_type not in settings.CV_ALLOWED_CONTENT_TYPES:
        raise UnsupportedFileType(content_type)

    if size is not None and size > settings.CV_MAX_UPLOAD_SIZE:
        raise AttachmentTooLarge(size, settings.CV_MAX_UPLOAD_SIZE)


def cv_file_reference(job_id: str, file_name: str) -> str:
    """Opaque, unique reference for a submitted CV, e.g. ``cv/job_1/<uuid>/cv.pdf``."""
    return f"cv/{job_id}/{uuid.uuid4().hex}/{os.path.basename(file_name)}"
