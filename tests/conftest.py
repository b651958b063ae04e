# File: tests/conftest.py

import pytest
import os
import sys
import subprocess
import logging
from pathlib import Path
from typing import List

# 1. Add project root to path
sys.path.append(os.getcwd())

from frame_grabber.core.shared_types import TimeWindow
from frame_grabber.features.frame_extraction.domain.interfaces import IDownloader, ITranscoder
from frame_grabber.features.frame_extraction.domain.models import ProcessOutcome

logging.basicConfig(level=logging.INFO)


class FakeDownloader(IDownloader):
    """
    Records every call into a shared log and returns a scripted outcome.
    On success it writes a dummy video file, like yt-dlp would.
    """

    def __init__(self, calls: List[tuple], returncode: int = 0, stderr: str = "", write_file: bool = True):
        self.calls = calls
        self.returncode = returncode
        self.stderr = stderr
        self.write_file = write_file

    def download(self, url: str, destination: Path) -> ProcessOutcome:
        self.calls.append(("download", url, destination))
        if self.returncode == 0 and self.write_file:
            destination.write_bytes(b"FAKE_VIDEO")
        return ProcessOutcome(self.returncode, self.stderr)


class FakeTranscoder(ITranscoder):
    """
    Records every call and, on success, writes `frames` numbered files
    using the printf-style output pattern.
    """

    def __init__(self, calls: List[tuple], returncode: int = 0, stderr: str = "", frames: int = 3):
        self.calls = calls
        self.returncode = returncode
        self.stderr = stderr
        self.frames = frames
        self.input_existed = None

    def transcode(self, input_path: Path, filters: str, window: TimeWindow, output_pattern: Path) -> ProcessOutcome:
        self.calls.append(("transcode", input_path, filters, window, output_pattern))
        self.input_existed = input_path.exists()
        if self.returncode == 0:
            for i in range(1, self.frames + 1):
                Path(str(output_pattern) % i).write_bytes(b"FAKE_PNG")
        return ProcessOutcome(self.returncode, self.stderr)


@pytest.fixture
def calls():
    """Shared, ordered log of external tool invocations."""
    return []


@pytest.fixture
def make_downloader(calls):
    def _make(**kwargs):
        return FakeDownloader(calls, **kwargs)
    return _make


@pytest.fixture
def make_transcoder(calls):
    def _make(**kwargs):
        return FakeTranscoder(calls, **kwargs)
    return _make


@pytest.fixture
def downloader(make_downloader):
    return make_downloader()


@pytest.fixture
def transcoder(make_transcoder):
    return make_transcoder()


@pytest.fixture
def synthetic_video(tmp_path):
    """
    Creates a 3-second test video with FFmpeg's lavfi test source.
    """
    video = tmp_path / "source.mp4"
    cmd = [
        "ffmpeg", "-y",
        "-f", "lavfi", "-i", "testsrc=duration=3:size=320x240:rate=30",
        "-c:v", "libx264", "-pix_fmt", "yuv420p",
        str(video)
    ]
    subprocess.run(cmd, check=True, capture_output=True)
    return video
