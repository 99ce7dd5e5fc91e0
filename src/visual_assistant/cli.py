"""
Visual Assistant CLI
Main entry point for running the tracker.

Modes:
  --validate      Check configuration validity
  --replay FILE   Run a recorded detection stream (JSONL)
  --live          Run on a camera with a YOLO model (needs the 'live' extra)
"""

import argparse
import logging
import signal
import sys
from dataclasses import replace
from threading import Event as ThreadEvent

from .config import (
    ConfigValidationError,
    build_tracker_settings,
    find_config_file,
    load_config,
    load_config_with_env,
    print_validation_result,
    read_config_file,
    validate_config_full,
)
from .config.schemas import Config
from .core import Tracker
from .processor import EventDispatcher, build_sinks
from .runner import AssistantRunner
from .sources import TranscriptListener, read_recording

logger = logging.getLogger(__name__)

# Module-level shutdown signal for SIGTERM/SIGINT handling
_shutdown_signal = ThreadEvent()


def _handle_shutdown_signal(signum, _frame):
    """Handle SIGTERM/SIGINT for graceful shutdown."""
    signal_name = "SIGTERM" if signum == signal.SIGTERM else "SIGINT"
    # Note: print is safer than logger in signal handlers
    print(f"\nReceived {signal_name}, initiating graceful shutdown...")
    _shutdown_signal.set()


def _setup_signal_handlers():
    """Register signal handlers for graceful shutdown."""
    signal.signal(signal.SIGTERM, _handle_shutdown_signal)
    signal.signal(signal.SIGINT, _handle_shutdown_signal)


def setup_logging(quiet: bool = False, verbose: bool = False) -> None:
    """
    Setup logging configuration.

    Args:
        quiet: If True, only show warnings and errors
        verbose: If True, include debug output (track lifecycle, skipped detections)
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    # Custom formatter with shorter module names
    class ShortNameFormatter(logging.Formatter):
        def format(self, record):
            record.name = record.name.replace("visual_assistant.", "va.")
            return super().format(record)

    handler = logging.StreamHandler()
    handler.setFormatter(
        ShortNameFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s", datefmt="%H:%M:%S"
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(level)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Visual Assistant - object tracking with spoken alerts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m visual_assistant --validate
  python -m visual_assistant --replay walk.jsonl
  python -m visual_assistant --live --listen     # type "traffic situation" for a summary

Environment Variables:
  VA_CAMERA_URL  - Override source.camera_url from config
  VA_WEBHOOK_URL - Override output.webhook_url from config
        """,
    )

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and show derived settings",
    )
    mode.add_argument("--replay", metavar="FILE", help="Replay a JSONL detection recording")
    mode.add_argument("--live", action="store_true", help="Run on the configured camera")

    parser.add_argument("-c", "--config", help="Path to config file (default: search)")
    parser.add_argument(
        "--listen",
        action="store_true",
        help="Read voice transcripts from stdin (live mode)",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q", "--quiet", action="store_true", help="Only show warnings and errors"
    )
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug output"
    )

    return parser.parse_args(argv)


def run_validate(config_path: str | None) -> int:
    """Run validation mode."""
    try:
        config_file = find_config_file(config_path)
        raw = read_config_file(config_file) if config_file else {}
    except ConfigValidationError as e:
        print(f"Error: {e}")
        return 1

    result = validate_config_full(load_config_with_env(raw))
    print_validation_result(result)
    return 0 if result.valid else 1


def run_replay(config: Config, recording: str) -> int:
    """Run a recorded detection stream through the tracker."""
    tracker = Tracker(build_tracker_settings(config))
    try:
        frames = read_recording(recording)
        with EventDispatcher(build_sinks(config.output)) as dispatcher:
            runner = AssistantRunner(tracker, dispatcher, config.summary.keywords)
            runner.run_replay(frames)
    except FileNotFoundError:
        logger.error(f"Recording not found: {recording}")
        return 1
    return 0


def run_live_mode(config: Config, listen: bool) -> int:
    """Run on a live camera."""
    if not config.source.camera_url:
        logger.error("source.camera_url is required for live mode")
        return 1

    try:
        from .sources.yolo import probe_frame_size, run_live
    except ImportError as e:
        logger.error(f"Live mode needs the 'live' extra ({e})")
        return 1

    width, height = probe_frame_size(config.source.camera_url)
    settings = replace(
        build_tracker_settings(config), viewport_width=width, viewport_height=height
    )
    logger.info(f"Viewport from camera: {width}x{height}")

    _setup_signal_handlers()
    tracker = Tracker(settings)
    with EventDispatcher(build_sinks(config.output)) as dispatcher:
        runner = AssistantRunner(tracker, dispatcher, config.summary.keywords)
        if listen:
            TranscriptListener(
                sys.stdin, runner.request_summary, config.summary.keywords
            ).start()
        run_live(
            runner,
            config.source.camera_url,
            config.source.model_file,
            config.source.confidence_threshold,
            _shutdown_signal,
        )
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main orchestrator function."""
    args = parse_args(argv)
    setup_logging(quiet=args.quiet or args.validate, verbose=args.verbose)

    if args.validate:
        sys.exit(run_validate(args.config))

    try:
        config = load_config(args.config)
    except ConfigValidationError as e:
        logger.error(str(e))
        for error in e.errors:
            logger.error(f"  {error}")
        sys.exit(1)

    if args.replay:
        sys.exit(run_replay(config, args.replay))

    sys.exit(run_live_mode(config, args.listen))


if __name__ == "__main__":
    main()
