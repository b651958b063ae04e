import logging
from pathlib import Path
from typing import List, Optional

from frame_grabber.core.config.settings import settings
from frame_grabber.core.shared_types import TimeWindow
from ..domain.interfaces import ITranscoder
from ..domain.models import ProcessOutcome
from .process_runner import run_tool

logger = logging.getLogger(__name__)


def build_transcode_command(
    binary: str,
    input_path: Path,
    filters: str,
    window: TimeWindow,
    output_pattern: Path,
) -> List[str]:
    # -hide_banner: Keep stderr down to the actual diagnostics
    # -y: Overwrite frames left over from a previous run
    # -ss: Start time, placed BEFORE -i so ffmpeg seeks the input instead of decoding up to it
    # -t: Duration, counted from the seek point
    # -vf: fps first, then scale, so discarded frames are never scaled
    cmd = [binary, "-hide_banner", "-y"]
    if window.start is not None:
        cmd += ["-ss", window.start]
    cmd += ["-i", str(input_path)]
    if window.duration is not None:
        cmd += ["-t", window.duration]
    cmd += ["-vf", filters, str(output_pattern)]
    return cmd


class FFmpegTranscoder(ITranscoder):
    """
    Concrete implementation of ITranscoder using FFmpeg.
    Writes one image per output frame using an image2 output pattern.
    """

    def __init__(self, binary: Optional[str] = None):
        self.binary = binary or settings.FFMPEG_BINARY

    def transcode(self, input_path: Path, filters: str, window: TimeWindow, output_pattern: Path) -> ProcessOutcome:
        cmd = build_transcode_command(self.binary, input_path, filters, window, output_pattern)

        logger.info(f"Executing FFmpeg: {' '.join(cmd)}")

        outcome = run_tool(cmd, stage="extracting")
        if not outcome.succeeded:
            error_message = outcome.stderr if outcome.stderr else "Unknown FFmpeg error"
            logger.error(f"FFmpeg frame extraction failed (exit {outcome.returncode}). STDERR: {error_message}")
        return outcome
