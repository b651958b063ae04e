import logging
import shutil
import tempfile
from pathlib import Path
from typing import Dict, Optional

from frame_grabber.core.common.enums import JobStage
from frame_grabber.core.errors import (
    DownloadFailed,
    ExtractionCancelled,
    ExtractionFailed,
    OrchestrationError,
    OutputDirectoryError,
)
from frame_grabber.core.shared_types import MediaFile, TimeWindow
from frame_grabber.features.options.domain.models import ExtractionJob, pattern_to_regex
from ..domain.interfaces import IDownloader, ITranscoder
from ..domain.models import ExtractionResult

logger = logging.getLogger(__name__)

TEMP_VIDEO_NAME = "video.mp4"


def build_filter_chain(job: ExtractionJob) -> str:
    """fps is always first; scale follows only when requested."""
    parts = [f"fps={job.fps_text}"]
    if job.scale is not None:
        parts.append(f"scale={job.scale}")
    return ",".join(parts)


class FrameExtractionOrchestrator:
    """
    Download -> Extract -> Cleanup.
    Each step requires the previous one to succeed. Nothing is retried.

    The orchestrator only talks to the outside world through the injected
    downloader and transcoder, so tests can swap in fakes.
    """

    def __init__(self, downloader: IDownloader, transcoder: ITranscoder):
        self.downloader = downloader
        self.transcoder = transcoder
        self.stage = JobStage.IDLE

    def run(self, job: ExtractionJob) -> ExtractionResult:
        if self.stage is not JobStage.IDLE:
            raise RuntimeError(f"Orchestrator already used (stage: {self.stage.value})")

        temp_dir: Optional[Path] = None
        if job.keep_video:
            video = MediaFile(job.video_path)
        else:
            temp_dir = Path(tempfile.mkdtemp(prefix="frame_grabber_"))
            video = MediaFile(temp_dir / TEMP_VIDEO_NAME)

        finished = False
        try:
            try:
                self._download(job, video)
                frame_count = self._extract(job, video)
            except KeyboardInterrupt:
                raise ExtractionCancelled(self.stage.value) from None
            finished = True
        except OrchestrationError:
            self._enter(JobStage.FAILED)
            raise
        finally:
            if not finished and temp_dir is not None:
                # Temp download is discarded on failure too
                shutil.rmtree(temp_dir, ignore_errors=True)

        self._cleanup(video, temp_dir)
        self._enter(JobStage.DONE)

        return ExtractionResult(
            out_dir=job.out_dir,
            frame_count=frame_count,
            video_path=video.path if job.keep_video else None,
        )

    def _enter(self, stage: JobStage) -> None:
        logger.info(f"Stage: {self.stage.value} -> {stage.value}")
        self.stage = stage

    def _download(self, job: ExtractionJob, video: MediaFile) -> None:
        self._enter(JobStage.DOWNLOADING)

        if job.keep_video:
            try:
                video.ensure_parent_dir()
            except OSError as e:
                raise DownloadFailed(f"Cannot create directory for {video.path}: {e}") from e

        outcome = self.downloader.download(job.url, video.path)
        if not outcome.succeeded:
            raise DownloadFailed(
                f"Video download failed (yt-dlp exit status {outcome.returncode})",
                outcome.stderr,
            )
        if not video.exists():
            raise DownloadFailed(f"yt-dlp did not produce expected file: {video.path}", outcome.stderr)

        logger.info(f"Downloaded {job.url} -> {video.path}")

    def _extract(self, job: ExtractionJob, video: MediaFile) -> Optional[int]:
        self._enter(JobStage.EXTRACTING)

        try:
            job.out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(f"Cannot create output directory {job.out_dir}: {e}") from e

        before = self._snapshot_frames(job)
        filters = build_filter_chain(job)
        window = TimeWindow(start=job.start, duration=job.duration)

        outcome = self.transcoder.transcode(video.path, filters, window, job.output_template)
        if not outcome.succeeded:
            raise ExtractionFailed(
                f"Frame extraction failed (ffmpeg exit status {outcome.returncode})",
                outcome.stderr,
            )

        frame_count = self._count_frames(job, before)
        if frame_count is not None:
            logger.info(f"Extracted {frame_count} frames into {job.out_dir}")
        return frame_count

    def _cleanup(self, video: MediaFile, temp_dir: Optional[Path]) -> None:
        self._enter(JobStage.CLEANING_UP)

        if temp_dir is None:
            logger.info(f"Keeping video at {video.path}")
            return

        try:
            video.path.unlink()
            shutil.rmtree(temp_dir)
        except OSError as e:
            # Non-fatal: frames are already written
            logger.warning(f"Could not remove temporary video {video.path}: {e}")

    @staticmethod
    def _snapshot_frames(job: ExtractionJob) -> Optional[Dict[str, int]]:
        """Modification times of frames already in out_dir, keyed by file name."""
        matcher = pattern_to_regex(job.pattern)
        try:
            return {
                entry.name: entry.stat().st_mtime_ns
                for entry in job.out_dir.iterdir()
                if entry.is_file() and matcher.fullmatch(entry.name)
            }
        except OSError as e:
            logger.warning(f"Could not list existing frames in {job.out_dir}: {e}")
            return None

    @staticmethod
    def _count_frames(job: ExtractionJob, before: Optional[Dict[str, int]]) -> Optional[int]:
        """Counts frames written by this run: new files, or files whose mtime changed."""
        if before is None:
            return None
        matcher = pattern_to_regex(job.pattern)
        try:
            return sum(
                1 for entry in job.out_dir.iterdir()
                if entry.is_file()
                and matcher.fullmatch(entry.name)
                and before.get(entry.name) != entry.stat().st_mtime_ns
            )
        except OSError as e:
            logger.warning(f"Could not count frames in {job.out_dir}: {e}")
            return None
