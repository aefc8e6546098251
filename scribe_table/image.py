"""
Upload validation and payload fitting for images sent to Gemini.

Oversized images are re-encoded as JPEG at decreasing quality until the base64
payload fits the budget. Resolution is never reduced: handwriting OCR suffers
more from downscaling than from moderate compression artifacts.
"""

import io
import base64
from dataclasses import dataclass
from typing import Optional, Sequence
from PIL import Image, ImageOps, UnidentifiedImageError

from . import config
from .core import logger
from .errors import CompressionError, FileTooLargeError, UnsupportedFormatError


@dataclass(frozen=True)
class UploadedImage:
    """Raw bytes of an uploaded image and its declared media type."""
    data: bytes
    mime_type: str
    file_name: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class EncodedPayload:
    """Base64 text of an image, ready to send.

    quality is None when the original bytes were kept.
    """
    data: str
    mime_type: str
    quality: Optional[int] = None

    @property
    def encoded_length(self) -> int:
        return len(self.data)

    def fits(self, budget: int) -> bool:
        return self.encoded_length <= budget

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)


def load_upload(
    data: bytes,
    mime_type: str,
    file_name: Optional[str] = None,
    supported_formats: Sequence[str] = config.UPLOAD_CONFIG["supported_formats"],
    max_file_size_mb: float = config.UPLOAD_CONFIG["max_file_size_mb"],
) -> UploadedImage:
    """
    Validate an uploaded file before any processing happens.

    Raises:
        UnsupportedFormatError: media type is not in the allow-list.
        FileTooLargeError: raw size exceeds max_file_size_mb.
    """
    if mime_type not in supported_formats:
        raise UnsupportedFormatError(
            f"Unsupported file type '{mime_type}'. Please upload a PNG, JPEG or WEBP image."
        )
    max_bytes = int(max_file_size_mb * 1024 * 1024)
    if len(data) > max_bytes:
        raise FileTooLargeError(
            f"File is too large ({len(data) / 1024 / 1024:.2f}MB). Maximum size is {max_file_size_mb}MB."
        )
    return UploadedImage(data=data, mime_type=mime_type, file_name=file_name)


def encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def reencode(surface: Image.Image, quality: int) -> bytes:
    """Encode a decoded image surface with the configured lossy format."""
    buf = io.BytesIO()
    surface.save(buf, format=config.COMPRESSION_CONFIG["output_format"], quality=quality)
    return buf.getvalue()


def fit_payload(
    image: UploadedImage,
    budget_bytes: int = config.UPLOAD_CONFIG["payload_limit_bytes"],
    start_quality: int = config.COMPRESSION_CONFIG["start_quality"],
    min_quality: int = config.COMPRESSION_CONFIG["min_quality"],
    quality_step: int = config.COMPRESSION_CONFIG["quality_step"],
) -> EncodedPayload:
    """
    Produce a base64 payload for the image that fits budget_bytes where possible.

    Images already under budget are returned untouched with their original
    media type. Larger images are re-encoded at full resolution, lowering quality
    by quality_step from start_quality, never below min_quality. The payload of
    the last attempt is returned even if it still exceeds the budget.

    Raises:
        CompressionError: the image could not be decoded or re-encoded.
    """
    original = encode_base64(image.data)
    if len(original) <= budget_bytes:
        return EncodedPayload(data=original, mime_type=image.mime_type)

    logger.info(
        f"File too large ({len(original) / 1024 / 1024:.2f}MB base64, budget "
        f"{budget_bytes / 1024 / 1024:.2f}MB), compressing..."
    )

    try:
        with Image.open(io.BytesIO(image.data)) as img:
            # bake in EXIF orientation, JPEG has no alpha channel
            surface = ImageOps.exif_transpose(img).convert("RGB")
        with surface:
            quality = start_quality
            encoded = encode_base64(reencode(surface, quality))
            while len(encoded) > budget_bytes and quality > min_quality:
                quality = max(quality - quality_step, min_quality)
                logger.info(f"Payload still {len(encoded)} chars, retrying at quality {quality}")
                encoded = encode_base64(reencode(surface, quality))
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise CompressionError(f"Could not compress image: {e}") from e

    if len(encoded) > budget_bytes:
        logger.warning(
            f"Payload exceeds budget at minimum quality {quality}: {len(encoded)} > {budget_bytes} chars"
        )
    else:
        logger.info(f"Compressed payload to {len(encoded)} chars at quality {quality}")

    return EncodedPayload(
        data=encoded,
        mime_type=config.COMPRESSION_CONFIG["output_mime_type"],
        quality=quality,
    )
