import logging
from pathlib import Path
from typing import List, Optional, Sequence

from frame_grabber.core.config.settings import settings
from ..domain.interfaces import IDownloader
from ..domain.models import ProcessOutcome
from .process_runner import run_tool

logger = logging.getLogger(__name__)


def build_download_command(launcher: Sequence[str], url: str, destination: Path, video_format: str) -> List[str]:
    # -o: Exact output file (no yt-dlp templating beyond what the user passed)
    # -f: Format selector, mp4 preferred
    # --remux-video mp4: Re-mux anything else into an mp4 container without re-encoding
    return [
        *launcher,
        "-o", str(destination),
        "-f", video_format,
        "--remux-video", "mp4",
        url,
    ]


class YtDlpDownloader(IDownloader):
    """
    Concrete implementation of IDownloader using yt-dlp.

    Args:
        launcher: Command prefix that starts yt-dlp, e.g. ["yt-dlp"] or
            [sys.executable, "-m", "yt_dlp"]. Defaults to the configured binary.
    """

    def __init__(self, launcher: Optional[Sequence[str]] = None, video_format: Optional[str] = None):
        self.launcher = list(launcher) if launcher else [settings.YT_DLP_BINARY]
        self.video_format = video_format or settings.YT_DLP_FORMAT

    def download(self, url: str, destination: Path) -> ProcessOutcome:
        cmd = build_download_command(self.launcher, url, destination, self.video_format)

        logger.info(f"Executing yt-dlp: {' '.join(cmd)}")

        outcome = run_tool(cmd, stage="downloading")
        if not outcome.succeeded:
            error_message = outcome.stderr if outcome.stderr else "Unknown yt-dlp error"
            logger.error(f"yt-dlp download failed (exit {outcome.returncode}). STDERR: {error_message}")
        return outcome
