"""
Module: builder.output.artifact

Purpose:
    The serialized result of one export adapter.

Key Classes:
    - Artifact: Bytes plus file extension and media type
"""

from __future__ import annotations

from dataclasses import dataclass

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"
HTML_MEDIA_TYPE = "text/html; charset=utf-8"


@dataclass(frozen=True)
class Artifact:
    """
    Export output (immutable).

    Attributes:
        data: Serialized bytes
        extension: File extension including the dot (".docx")
        media_type: MIME type

    Example:
        >>> Artifact(b"...", ".txt", TEXT_MEDIA_TYPE).file_name("worksheet")
        'worksheet.txt'
    """

    data: bytes
    extension: str
    media_type: str

    def file_name(self, stem: str) -> str:
        return f"{stem}{self.extension}"

    @property
    def size(self) -> int:
        return len(self.data)
