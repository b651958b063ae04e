"""Command-line entry point: frame-grabber <URL> [options]."""
import logging
import sys
from typing import List, Optional

from frame_grabber.core.config.settings import settings
from frame_grabber.core.errors import ExtractionCancelled, OrchestrationError, ValidationError
from frame_grabber.features.frame_extraction.service.api import extract_frames
from frame_grabber.features.options.service.resolver import build_parser, job_from_args

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_CANCELLED = 130


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = settings.LOG_LEVEL
    logging.basicConfig(level=level, format=settings.LOG_FORMAT, stream=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        job = job_from_args(args)
    except ValidationError as e:
        print(parser.format_usage().rstrip(), file=sys.stderr)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(args.verbose)
    logger.info(f"Extracting frames from {job.url} into {job.out_dir} at {job.fps_text} fps")

    try:
        result = extract_frames(job, fetch_downloader=args.fetch_yt_dlp)
    except ExtractionCancelled as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CANCELLED
    except OrchestrationError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if result.frame_count is None:
        print(f"Done. Frames in: {result.out_dir}")
    else:
        print(f"Done. {result.frame_count} frames in: {result.out_dir}")
    if result.video_path is not None:
        print(f"Video kept at: {result.video_path}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
