from abc import ABC, abstractmethod
from pathlib import Path

from frame_grabber.core.shared_types import TimeWindow
from .models import ProcessOutcome

class IDownloader(ABC):
    """
    Contract for the video downloader.
    Abstracts away the underlying tool (yt-dlp) from the orchestration logic.
    """

    @abstractmethod
    def download(self, url: str, destination: Path) -> ProcessOutcome:
        """
        Materializes the video behind `url` as a local file at `destination`.

        Returns:
            The exit status and captured stderr. A failed spawn is reported
            as a non-zero outcome, not an exception.

        Raises:
            ExtractionCancelled: If the user interrupts the download.
        """
        pass

class ITranscoder(ABC):
    """
    Contract for the frame extraction engine (FFmpeg).
    """

    @abstractmethod
    def transcode(self, input_path: Path, filters: str, window: TimeWindow, output_pattern: Path) -> ProcessOutcome:
        """
        Writes numbered still images from `input_path` to `output_pattern`.

        Args:
            input_path: Local video file.
            filters: Video filter chain, e.g. "fps=10,scale=720:-1".
            window: Optional start offset and duration.
            output_pattern: printf-style output path, e.g. frames/frame_%06d.png.

        Raises:
            ExtractionCancelled: If the user interrupts the extraction.
        """
        pass
