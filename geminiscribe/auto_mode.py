"""Auto mode: transcribe one file and export it without the interactive screen."""

import time
import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from .config import GeminiScribeConfig
from .media import DropZone, format_bytes
from .models.session import AppStatus, Session
from .services import SessionController, TranscriptionService
from .storage.download_manager import DownloadManager
from .ui.transcript_view import TranscriptViewer

logger = logging.getLogger(__name__)


def run_auto_mode(config: GeminiScribeConfig,
                  file_path: str,
                  export_formats: Sequence[str] = ("txt",),
                  copy: bool = False,
                  controller: Optional[SessionController] = None,
                  downloads: Optional[DownloadManager] = None) -> List[Path]:
    """Run Gemini Scribe non-interactively.

    This mode:
    1. Validates and selects the file
    2. Transcribes it
    3. Exports the transcript in the requested formats
    4. Reports results and exits

    Args:
        config: Loaded configuration
        file_path: Media file to transcribe
        export_formats: Any of "txt", "pdf", "doc"
        copy: Also place the transcript on the clipboard
        controller: Session controller; built from config when omitted
        downloads: Download manager; built from config when omitted

    Returns:
        Paths of the exported files

    Raises:
        RuntimeError: If the file is rejected or the transcription fails
    """
    logger.info(f"🤖 Starting auto mode for {file_path}")

    controller = controller or SessionController(TranscriptionService(config))
    downloads = downloads or DownloadManager(config.get_output_directory())

    print("📋 Auto mode initialized")
    print(f"   Config: {config.config_file or 'built-in defaults'}")
    print(f"   Model: {config.get('gemini.model')}")
    print(f"   Output directory: {downloads.download_dir}")
    print()

    session = _select_file(config, controller, file_path)
    session, total_time = _run_transcription(controller)
    paths = _export(config, session, downloads, export_formats, copy)
    _report_results(session, paths, total_time)

    logger.info(f"Auto mode completed: {session.file.name}, {total_time:.1f}s, {len(paths)} exports")
    return paths


def _select_file(config: GeminiScribeConfig, controller: SessionController, file_path: str) -> Session:
    rejections = []
    drop_zone = DropZone(
        on_file_accepted=controller.accept_file,
        on_file_rejected=rejections.append,
        max_bytes=config.get_max_upload_bytes()
    )
    media = drop_zone.handle_selection(file_path)
    if media is None:
        raise RuntimeError(rejections[0] if rejections else f"File rejected: {file_path}")

    print(f"🎵 Selected: {media.name} ({format_bytes(media.size)} • {media.mime_type})")
    return controller.session


def _run_transcription(controller: SessionController) -> tuple:
    print("✨ Transcribing... This might take a moment depending on the file size.")
    start_time = time.time()
    asyncio.run(controller.start_transcription())
    total_time = time.time() - start_time

    session = controller.session
    if session.status is not AppStatus.COMPLETED:
        raise RuntimeError(f"Transcription failed. {session.error}")
    return session, total_time


def _export(config: GeminiScribeConfig, session: Session, downloads: DownloadManager,
            export_formats: Sequence[str], copy: bool) -> List[Path]:
    viewer = TranscriptViewer(
        session.transcript, session.file.name, downloads,
        pdf_font_path=config.get('export.pdf_font_path')
    )
    paths = [viewer.download(fmt) for fmt in export_formats]
    if copy:
        viewer.copy()
        print("📋 Transcript copied to clipboard")
    return paths


def _report_results(session: Session, paths: List[Path], total_time: float) -> None:
    """Report the results of the auto mode run."""
    print()
    print("✅ Transcription completed")
    print(f"   File: {session.file.name}")
    print(f"   Total time: {total_time:.1f} seconds")
    print(f"   Characters: {len(session.transcript)}")
    print()

    preview = session.transcript[:300]
    print("📝 Transcript preview:")
    for line in preview.splitlines():
        print(f"   {line}")
    if len(session.transcript) > len(preview):
        print("   ...")
    print()

    if paths:
        print("📁 Output Files Generated:")
        for path in paths:
            size = path.stat().st_size if path.exists() else 0
            print(f"   ✅ {path} ({size:,} bytes)")
