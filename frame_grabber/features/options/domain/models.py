import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_OUT_DIR = "frames"
DEFAULT_FPS = 10.0
DEFAULT_PATTERN = "frame_%06d.png"
DEFAULT_VIDEO_PATH = "video.mp4"

# printf-style integer conversion: %d, %6d, %06d. "%%" is a literal percent.
_PLACEHOLDER = re.compile(r"%%|%0?(\d*)d")
_PERCENT_TOKEN = re.compile(r"%%|%0?\d*d|%")


def count_placeholders(pattern: str) -> int:
    return sum(1 for m in _PLACEHOLDER.finditer(pattern) if m.group(0) != "%%")


def has_stray_percent(pattern: str) -> bool:
    """True for any "%" that is neither "%%" nor a numeric placeholder ("%s", "50%_")."""
    return any(m.group(0) == "%" for m in _PERCENT_TOKEN.finditer(pattern))


def pattern_to_regex(pattern: str) -> "re.Pattern[str]":
    """
    Turns "frame_%06d.png" into a regex matching the file names the
    transcoder writes for it ("frame_000001.png", "frame_1234567.png").
    """
    parts = []
    pos = 0
    for m in _PLACEHOLDER.finditer(pattern):
        parts.append(re.escape(pattern[pos:m.start()]))
        parts.append("%" if m.group(0) == "%%" else r"\d+")
        pos = m.end()
    parts.append(re.escape(pattern[pos:]))
    return re.compile("".join(parts))


@dataclass(frozen=True)
class ExtractionJob:
    """
    Everything needed to turn one video URL into a folder of frames.
    Built once by the option resolver and never mutated.
    """
    url: str
    out_dir: Path = Path(DEFAULT_OUT_DIR)
    fps: float = DEFAULT_FPS
    pattern: str = DEFAULT_PATTERN
    scale: Optional[str] = None
    start: Optional[str] = None
    duration: Optional[str] = None
    keep_video: bool = False
    video_path: Path = Path(DEFAULT_VIDEO_PATH)

    def __post_init__(self):
        if not self.url or not self.url.strip():
            raise ValueError("URL cannot be empty.")
        if not math.isfinite(self.fps) or self.fps <= 0:
            raise ValueError(f"Frame rate must be a positive number, got {self.fps}.")
        if has_stray_percent(self.pattern):
            raise ValueError(f"Pattern has an unsupported % sequence: {self.pattern!r}")
        if count_placeholders(self.pattern) != 1:
            raise ValueError(
                f"Pattern must contain exactly one numeric placeholder (e.g. %06d): {self.pattern!r}"
            )
        if "/" in self.pattern or "\\" in self.pattern:
            raise ValueError(f"Pattern must be a file name, not a path: {self.pattern!r}")

    @property
    def output_template(self) -> Path:
        return self.out_dir / self.pattern

    @property
    def fps_text(self) -> str:
        """10.0 -> "10", 29.97 -> "29.97"."""
        fps = float(self.fps)
        if fps.is_integer():
            return str(int(fps))
        return repr(fps)
