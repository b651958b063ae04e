import shutil
import pytest
from pathlib import Path

from frame_grabber.features.options.domain.models import ExtractionJob
from frame_grabber.features.frame_extraction.data.ffmpeg_adapter import FFmpegTranscoder
from frame_grabber.features.frame_extraction.domain.interfaces import IDownloader
from frame_grabber.features.frame_extraction.domain.models import ProcessOutcome
from frame_grabber.features.frame_extraction.service.orchestrator import FrameExtractionOrchestrator

pytestmark = pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not installed")


class LocalCopyDownloader(IDownloader):
    """'Downloads' by copying a local file, so only ffmpeg is exercised for real."""

    def __init__(self, source: Path):
        self.source = source

    def download(self, url: str, destination: Path) -> ProcessOutcome:
        shutil.copy2(self.source, destination)
        return ProcessOutcome(0)


def test_extracts_real_frames(tmp_path, synthetic_video):
    """
    Integration Test:
    A 3-second 30fps clip sampled at 2 fps yields about 6 PNG frames, numbered from 1.
    """
    job = ExtractionJob(url="https://example.com/watch?v=test", out_dir=tmp_path / "frames", fps=2)

    result = FrameExtractionOrchestrator(LocalCopyDownloader(synthetic_video), FFmpegTranscoder()).run(job)

    frames = sorted((tmp_path / "frames").glob("frame_*.png"))
    assert result.frame_count == len(frames)
    assert 5 <= len(frames) <= 7
    assert frames[0].name == "frame_000001.png"
    assert frames[0].stat().st_size > 0


def test_time_window_and_scale_are_applied(tmp_path, synthetic_video):
    job = ExtractionJob(
        url="https://example.com/watch?v=test",
        out_dir=tmp_path / "shots",
        fps=1,
        pattern="shot_%03d.jpg",
        scale="160:-2",
        start="00:00:01",
        duration="1",
    )

    result = FrameExtractionOrchestrator(LocalCopyDownloader(synthetic_video), FFmpegTranscoder()).run(job)

    frames = sorted((tmp_path / "shots").glob("shot_*.jpg"))
    assert 1 <= len(frames) <= 2
    assert result.frame_count == len(frames)
    assert frames[0].name == "shot_001.jpg"


def test_broken_input_surfaces_ffmpeg_stderr(tmp_path):
    from frame_grabber.core.errors import ExtractionFailed

    bogus = tmp_path / "bogus.mp4"
    bogus.write_bytes(b"this is not a video")
    job = ExtractionJob(url="https://example.com/watch?v=test", out_dir=tmp_path / "frames")

    with pytest.raises(ExtractionFailed) as exc_info:
        FrameExtractionOrchestrator(LocalCopyDownloader(bogus), FFmpegTranscoder()).run(job)

    assert exc_info.value.stderr
