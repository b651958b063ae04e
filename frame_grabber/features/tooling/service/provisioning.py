import importlib.util
import logging
import shutil
import sys
from pathlib import Path
from typing import List

from frame_grabber.core.common.enums import ExternalTool
from frame_grabber.core.config.settings import settings
from frame_grabber.core.errors import ToolNotFoundError

logger = logging.getLogger(__name__)


def _resolvable(binary: str) -> bool:
    """True for a name on PATH or an explicit path to an existing file."""
    if shutil.which(binary):
        return True
    return Path(binary).is_file()


def ensure_ffmpeg_available(binary: str = None) -> str:
    binary = binary or settings.FFMPEG_BINARY
    if not _resolvable(binary):
        raise ToolNotFoundError(
            ExternalTool.TRANSCODER.value,
            "Install it with your package manager or set FFMPEG_BINARY_PATH.",
        )
    return binary


def resolve_downloader(fetch_if_missing: bool = False, binary: str = None) -> List[str]:
    """
    Returns the command prefix that launches yt-dlp.

    Prefers the configured binary. With `fetch_if_missing`, falls back to the
    yt_dlp package installed alongside this tool, run with the current interpreter.
    """
    binary = binary or settings.YT_DLP_BINARY
    if _resolvable(binary):
        return [binary]

    if not fetch_if_missing:
        raise ToolNotFoundError(
            ExternalTool.DOWNLOADER.value,
            "Install it (`pip install yt-dlp`, package manager) or run with --fetch-yt-dlp.",
        )

    if importlib.util.find_spec("yt_dlp") is None:
        raise ToolNotFoundError(
            ExternalTool.DOWNLOADER.value,
            f"The yt_dlp package is not installed for {sys.executable} either; run `pip install yt-dlp`.",
        )

    logger.info(f"{binary} not on PATH, using the yt_dlp package via {sys.executable}")
    return [sys.executable, "-m", "yt_dlp"]
