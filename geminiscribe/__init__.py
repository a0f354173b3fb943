"""Gemini Scribe: turn audio and video files into editable, exportable text."""

__version__ = "0.1.0"
