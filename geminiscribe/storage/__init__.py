"""Local file output for Gemini Scribe."""

from .download_manager import DownloadManager, decode_data_uri

__all__ = ["DownloadManager", "decode_data_uri"]
