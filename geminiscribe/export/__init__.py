"""Transcript export to plain text, PDF and Word-compatible HTML."""

from .exporters import (
    export_filename,
    render_txt,
    render_pdf,
    render_doc_html,
    doc_data_uri,
)

__all__ = [
    "export_filename",
    "render_txt",
    "render_pdf",
    "render_doc_html",
    "doc_data_uri",
]
