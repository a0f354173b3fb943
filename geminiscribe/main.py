"""Main application entry point for Gemini Scribe."""

import sys
import argparse
import logging
from pathlib import Path

from . import __version__
from .auto_mode import run_auto_mode
from .config import GeminiScribeConfig
from .ui.transcription_screen import TranscriptionScreen

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ["txt", "pdf", "doc"]


def setup_logging(config, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    # Get log file path from config
    log_file_path = config.get('logging.file_path', 'data/logs/geminiscribe.log')
    console_output = config.get('logging.console_output', True)

    # Create logs directory if it doesn't exist
    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    # Set up handlers
    handlers = []

    # File handler - always write to file
    file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    file_handler.setFormatter(file_formatter)
    handlers.append(file_handler)

    # Console handler - only if enabled in config
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)  # Only show warnings and above on console
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    # Log startup
    logger.info("=" * 50)
    logger.info("Gemini Scribe application starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("=" * 50)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Gemini Scribe - Turn audio and video into text with Google Gemini",
        epilog="Commands: 1=Start/Copy, 2=Remove/TXT, 3=PDF, 4=Word, 5=Edit, 6=New file, q=Quit"
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Audio or video file to transcribe (may also be dropped onto the window later)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: looks for geminiscribe.yaml)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: from config, else INFO)"
    )

    parser.add_argument(
        "--auto",
        action="store_true",
        help="Run in automatic mode: transcribe FILE, export it, then exit"
    )

    parser.add_argument(
        "--export",
        nargs="+",
        choices=EXPORT_FORMATS,
        default=["txt"],
        help="Export formats for auto mode (default: txt)"
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        help="Directory for exported files (overrides config)"
    )

    parser.add_argument(
        "--copy",
        action="store_true",
        help="Auto mode: also copy the transcript to the clipboard"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Gemini Scribe v{__version__}"
    )

    return parser


def main() -> None:
    """Main entry point for Gemini Scribe application."""
    parser = build_parser()
    args = parser.parse_args()

    if args.auto and not args.file:
        parser.error("--auto requires a FILE")

    try:
        config = GeminiScribeConfig(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    if args.output_dir:
        config.set('export.output_directory', args.output_dir)

    # Command line overrides config
    log_level = args.log_level or config.get('logging.level', 'INFO')
    setup_logging(config, log_level)

    try:
        if args.auto:
            run_auto_mode(config, args.file, export_formats=args.export, copy=args.copy)
        else:
            screen = TranscriptionScreen(config)
            if args.file:
                screen.drop_zone.handle_selection(args.file)
            screen.run()
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
    except Exception as e:
        print(f"❌ Error: {e}")
        logger.error(f"Application error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
