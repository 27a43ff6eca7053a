"""
PDF compression through the ``compress-pdf`` function.

The PDF is uploaded as a multipart ``file`` field; the service answers with
the compressed document base64-encoded under ``compressedFile``.
"""

import base64
import binascii
import logging
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from webtools.errors import ExternalServiceError
from webtools.services.http import FunctionsClient

logger = logging.getLogger(__name__)

COMPRESS_FUNCTION = "compress-pdf"
PDF_MAGIC = b"%PDF-"
MAX_PDF_BYTES = 50 * 1024 * 1024


class PdfCompressionRequest(BaseModel):
    filename: str = Field(default="document.pdf", min_length=1)
    content: bytes = Field(..., description="Raw PDF bytes")

    @field_validator("content")
    @classmethod
    def validate_pdf(cls, v: bytes) -> bytes:
        if not v.startswith(PDF_MAGIC):
            raise ValueError("Please select a valid PDF file")
        if len(v) > MAX_PDF_BYTES:
            raise ValueError(
                f"File too large. Maximum size is {MAX_PDF_BYTES // (1024 * 1024)}MB"
            )
        return v

    @classmethod
    def from_base64(cls, data: str, filename: str = "document.pdf") -> "PdfCompressionRequest":
        try:
            content = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid base64 PDF content: {e}") from e
        return cls(filename=filename, content=content)


class PdfCompressionResult(BaseModel):
    filename: str
    original_size: int
    compressed_size: int
    content: bytes = Field(..., exclude=True)

    @computed_field
    @property
    def reduction_percent(self) -> float:
        if self.original_size == 0:
            return 0.0
        return (self.original_size - self.compressed_size) / self.original_size * 100

    @computed_field
    @property
    def saved_mb(self) -> float:
        return round((self.original_size - self.compressed_size) / 1024 / 1024, 2)


def compressed_filename(filename: str) -> str:
    stem = filename[:-4] if filename.lower().endswith(".pdf") else filename
    return f"{stem}-compressed.pdf"


def compress_pdf(
    request: PdfCompressionRequest, client: Optional[FunctionsClient] = None
) -> PdfCompressionResult:
    """
    Compress a PDF remotely.

    Raises:
        ExternalServiceError: If the call fails or the response has no
            decodable ``compressedFile``
    """
    client = client or FunctionsClient()
    logger.info(f"Compressing {request.filename} ({len(request.content)} bytes)")
    data = client.invoke(
        COMPRESS_FUNCTION,
        files={"file": (request.filename, request.content, "application/pdf")},
    )

    encoded = data.get("compressedFile") if isinstance(data, dict) else None
    if not encoded:
        raise ExternalServiceError("Compression service returned no file")
    try:
        compressed = base64.b64decode(encoded)
    except (binascii.Error, ValueError) as e:
        raise ExternalServiceError(f"Compression service returned invalid data: {e}") from e

    return PdfCompressionResult(
        filename=compressed_filename(request.filename),
        original_size=len(request.content),
        compressed_size=len(compressed),
        content=compressed,
    )
