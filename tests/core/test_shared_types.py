import pytest
from pathlib import Path

from frame_grabber.core.errors import DownloadFailed, ValidationError
from frame_grabber.core.shared_types import MediaFile, TimeWindow


def test_time_window_defaults_to_full_length():
    assert TimeWindow().is_full_length
    assert not TimeWindow(start="5").is_full_length


def test_time_window_rejects_blank_values():
    with pytest.raises(ValueError):
        TimeWindow(duration="  ")


def test_media_file_rejects_empty_path():
    with pytest.raises(ValueError):
        MediaFile(Path(""))


def test_media_file_parent_dir(tmp_path):
    media = MediaFile(tmp_path / "a" / "b" / "video.mp4")

    media.ensure_parent_dir()
    media.ensure_parent_dir()

    assert media.path.parent.is_dir()
    assert not media.exists()


def test_error_messages():
    assert str(ValidationError("--fps", "must be greater than 0")) == "--fps: must be greater than 0"
    assert str(ValidationError(None, "unrecognized arguments: -x")) == "unrecognized arguments: -x"

    failure = DownloadFailed("Video download failed", "ERROR: network error\n")
    assert str(failure) == "Video download failed\nERROR: network error"
    assert failure.stderr == "ERROR: network error\n"
