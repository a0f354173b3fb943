"""Media intake: file selection, validation and encoding."""

from .drop_zone import DropZone, FileRejectedError
from .encoder import encode_file
from .file_utils import format_bytes

__all__ = [
    "DropZone",
    "FileRejectedError",
    "encode_file",
    "format_bytes",
]
