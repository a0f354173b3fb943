"""Base64 encoding of media files for inline request payloads."""

import base64
import logging

from ..models.session import MediaFile

logger = logging.getLogger(__name__)


def encode_file(media: MediaFile) -> str:
    """Read the whole file and return its content as base64 text.

    The remote API takes the payload inline, so the file is read fully
    into memory. Read errors propagate to the caller.
    """
    data = media.read_bytes()
    encoded = base64.b64encode(data).decode("ascii")
    logger.debug(f"Encoded {media.name}: {len(data)} bytes -> {len(encoded)} base64 chars")
    return encoded
