import argparse
import logging
import math
from pathlib import Path
from typing import List, Optional

from frame_grabber.core.config.settings import settings
from frame_grabber.core.errors import ValidationError
from ..domain.models import (
    DEFAULT_FPS,
    DEFAULT_OUT_DIR,
    DEFAULT_PATTERN,
    DEFAULT_VIDEO_PATH,
    ExtractionJob,
    count_placeholders,
    has_stray_percent,
)

logger = logging.getLogger(__name__)


class _RaisingArgumentParser(argparse.ArgumentParser):
    """argparse reports usage errors via sys.exit; we want a ValidationError instead."""

    def error(self, message: str):
        raise ValidationError(None, message)


def build_parser() -> argparse.ArgumentParser:
    parser = _RaisingArgumentParser(
        prog="frame-grabber",
        description="Download a video with yt-dlp and extract still frames from it with ffmpeg.",
    )
    parser.add_argument("url", nargs="?", help="Video URL (anything yt-dlp understands).")
    parser.add_argument(
        "-o", "--out-dir",
        default=DEFAULT_OUT_DIR,
        help="Output directory for frames, created if missing (default: %(default)s).",
    )
    parser.add_argument(
        "-f", "--fps",
        default=str(int(DEFAULT_FPS)),
        help="Frames to extract per second of video (default: %(default)s).",
    )
    parser.add_argument(
        "--pattern",
        default=DEFAULT_PATTERN,
        help="Output file name with one numeric placeholder (default: %(default)s).",
    )
    parser.add_argument("--scale", help="Re-scale applied after fps, e.g. 1280:-1 or 720:-2.")
    parser.add_argument("--start", help="Start time, e.g. 00:00:05.")
    parser.add_argument("--duration", help="Duration, e.g. 10 or 00:00:10.")
    parser.add_argument(
        "--keep-video",
        action="store_true",
        help="Keep the downloaded video (otherwise it lives in a temp dir and is deleted).",
    )
    parser.add_argument(
        "--video-path",
        default=None,
        help=f"Where to save the video when --keep-video is set (default: {DEFAULT_VIDEO_PATH}).",
    )
    parser.add_argument(
        "--fetch-yt-dlp",
        action="store_true",
        help="If yt-dlp is not on PATH, run the bundled yt_dlp Python package instead.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log progress (-v) or debug details (-vv) to stderr.",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {settings.VERSION}")
    return parser


def parse_fps(raw: str) -> float:
    try:
        fps = float(raw)
    except (TypeError, ValueError):
        raise ValidationError("--fps", f"expected a number, got {raw!r}")
    if not math.isfinite(fps) or fps <= 0:
        raise ValidationError("--fps", f"must be greater than 0, got {raw!r}")
    return fps


def job_from_args(args: argparse.Namespace) -> ExtractionJob:
    """Validates parsed arguments and freezes them into an ExtractionJob."""
    if args.url is None or not args.url.strip():
        raise ValidationError("url", "a video URL is required")

    fps = parse_fps(args.fps)

    if has_stray_percent(args.pattern):
        raise ValidationError(
            "--pattern", f"only %d-style placeholders and %% are supported, got {args.pattern!r}"
        )
    if count_placeholders(args.pattern) != 1:
        raise ValidationError(
            "--pattern", f"must contain exactly one numeric placeholder such as %06d, got {args.pattern!r}"
        )
    if "/" in args.pattern or "\\" in args.pattern:
        raise ValidationError("--pattern", f"must be a file name, not a path: {args.pattern!r}")

    if args.video_path is not None and not args.keep_video:
        raise ValidationError("--video-path", "only makes sense together with --keep-video")
    if args.video_path is not None and Path(args.video_path).suffix.lower() != ".mp4":
        # yt-dlp remuxes to mp4 and names the file accordingly
        raise ValidationError("--video-path", f"must end in .mp4, got {args.video_path!r}")

    for flag, value in (("--scale", args.scale), ("--start", args.start), ("--duration", args.duration)):
        if value is not None and not value.strip():
            raise ValidationError(flag, "cannot be empty")

    job = ExtractionJob(
        url=args.url,
        out_dir=Path(args.out_dir),
        fps=fps,
        pattern=args.pattern,
        scale=args.scale,
        start=args.start,
        duration=args.duration,
        keep_video=args.keep_video,
        video_path=Path(args.video_path or DEFAULT_VIDEO_PATH),
    )
    logger.debug(f"Resolved job: {job}")
    return job


def resolve(argv: Optional[List[str]] = None) -> ExtractionJob:
    """
    Public entry point of the option resolver.

    Args:
        argv: Raw command-line arguments (without the program name).

    Returns:
        A fully populated ExtractionJob.

    Raises:
        ValidationError: On any malformed or missing option.
    """
    args = build_parser().parse_args(argv)
    return job_from_args(args)
