"""Download folder management for exported transcripts."""

import base64
import logging
from pathlib import Path
from urllib.parse import unquote_to_bytes


logger = logging.getLogger(__name__)


class DownloadManager:
    """Writes exported artifacts into a downloads directory, browser style."""

    def __init__(self, download_dir: str = "./downloads"):
        """Initialize download manager with target directory.

        Args:
            download_dir: Directory that receives the downloaded files
        """
        self.download_dir = Path(download_dir)
        logger.info(f"DownloadManager initialized with download_dir: {self.download_dir}")

    def _ensure_directory(self) -> None:
        self.download_dir.mkdir(parents=True, exist_ok=True)

    def unique_path(self, filename: str) -> Path:
        """Path for ``filename`` that does not clobber an earlier download.

        ``notes.txt`` becomes ``notes (1).txt``, ``notes (2).txt``, ...
        """
        candidate = self.download_dir / filename
        stem, suffix = candidate.stem, candidate.suffix
        counter = 1
        while candidate.exists():
            candidate = self.download_dir / f"{stem} ({counter}){suffix}"
            counter += 1
        return candidate

    def save_bytes(self, data: bytes, filename: str) -> Path:
        """Save raw bytes and return the path written.

        Args:
            data: File content
            filename: Suggested file name

        Returns:
            Full path to the saved file
        """
        self._ensure_directory()
        file_path = self.unique_path(filename)

        try:
            with open(file_path, 'wb') as f:
                f.write(data)
        except OSError as e:
            logger.error(f"Error saving download {filename}: {e}")
            raise

        logger.info(f"Download saved: {file_path} ({len(data)} bytes)")
        return file_path

    def save_text(self, text: str, filename: str) -> Path:
        return self.save_bytes(text.encode('utf-8'), filename)

    def save_data_uri(self, uri: str, filename: str) -> Path:
        """Save the payload of a ``data:`` URI, as a browser does for a link download."""
        return self.save_bytes(decode_data_uri(uri), filename)


def decode_data_uri(uri: str) -> bytes:
    """Return the bytes carried by a ``data:`` URI."""
    header, separator, payload = uri.partition(',')
    if not header.startswith('data:') or not separator:
        raise ValueError(f"Not a data URI: {uri[:40]}")

    if header.endswith(';base64'):
        return base64.b64decode(payload)
    return unquote_to_bytes(payload)
